import pytest


CALIBRATION = {
    "scale_point1": {"x": 0, "y": 0},
    "scale_point2": {"x": 100, "y": 0},
    "scale_distance": 1.0,
    "scale_unit": "m",
    "origin": {"x": 0, "y": 0},
    "rotation": 0,
    "y_axis_up": True,
}


def _create_project(client, name: str = "Ball roll", user: str = None) -> str:
    headers = {"X-User-Id": user} if user else {}
    response = client.post("/api/projects", json={"name": name}, headers=headers)
    assert response.status_code == 201
    return response.json()["id"]


def _track_accelerating(client, project_id: str) -> list:
    """x = t²/2 metres at 100 px per metre, one point per second."""
    points = [
        {"frame_number": f, "time_seconds": float(f), "pixel_x": f * f * 50.0, "pixel_y": 0.0}
        for f in range(5)
    ]
    response = client.post(f"/api/projects/{project_id}/points", json={"points": points})
    assert response.status_code == 201
    return response.json()


@pytest.fixture()
def calibrated_project(client) -> str:
    project_id = _create_project(client)
    response = client.put(f"/api/projects/{project_id}", json={"coordinate_system": CALIBRATION})
    assert response.status_code == 200
    _track_accelerating(client, project_id)
    return project_id


def test_health(client) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_project_lifecycle(client) -> None:
    project_id = _create_project(client)

    listed = client.get("/api/projects").json()
    assert [p["id"] for p in listed] == [project_id]

    detail = client.get(f"/api/projects/{project_id}").json()
    assert detail["name"] == "Ball roll"
    assert detail["data_points"] == []
    assert detail["settings"]["coordinate_system"] is None

    response = client.put(f"/api/projects/{project_id}", json={"name": "Ball drop"})
    assert response.json()["name"] == "Ball drop"

    response = client.delete(f"/api/projects/{project_id}")
    assert response.status_code == 200
    assert client.get(f"/api/projects/{project_id}").status_code == 404


def test_projects_are_scoped_to_caller(client) -> None:
    project_id = _create_project(client, user="alice")

    assert client.get(f"/api/projects/{project_id}", headers={"X-User-Id": "bob"}).status_code == 404
    assert client.get("/api/projects", headers={"X-User-Id": "bob"}).json() == []
    assert client.get(f"/api/projects/{project_id}", headers={"X-User-Id": "alice"}).status_code == 200


def test_invalid_scale_unit_rejected(client) -> None:
    project_id = _create_project(client)
    bad = dict(CALIBRATION, scale_unit="furlong")
    response = client.put(f"/api/projects/{project_id}", json={"coordinate_system": bad})
    assert response.status_code == 422


def test_points_stored_in_frame_order(client) -> None:
    project_id = _create_project(client)
    points = [
        {"frame_number": 2, "time_seconds": 0.2, "pixel_x": 3.0, "pixel_y": 3.0},
        {"frame_number": 0, "time_seconds": 0.0, "pixel_x": 1.0, "pixel_y": 1.0},
    ]
    client.post(f"/api/projects/{project_id}/points", json={"points": points})

    detail = client.get(f"/api/projects/{project_id}").json()
    assert [p["frame_number"] for p in detail["data_points"]] == [0, 2]


def test_duplicate_frame_rejected(client) -> None:
    project_id = _create_project(client)
    _track_accelerating(client, project_id)

    duplicate = {"frame_number": 2, "time_seconds": 2.0, "pixel_x": 1.0, "pixel_y": 1.0}
    response = client.post(f"/api/projects/{project_id}/points", json={"points": [duplicate]})
    assert response.status_code == 409

    detail = client.get(f"/api/projects/{project_id}").json()
    assert len(detail["data_points"]) == 5


def test_non_finite_coordinates_rejected(client) -> None:
    project_id = _create_project(client)

    point = {"frame_number": 0, "time_seconds": 0.0, "pixel_x": "inf", "pixel_y": 1.0}
    response = client.post(f"/api/projects/{project_id}/points", json={"points": [point]})
    assert response.status_code == 422

    point = dict(point, pixel_x=1.0, time_seconds="nan")
    response = client.post(f"/api/projects/{project_id}/points", json={"points": [point]})
    assert response.status_code == 422

    bad = dict(CALIBRATION, rotation="inf")
    response = client.put(f"/api/projects/{project_id}", json={"coordinate_system": bad})
    assert response.status_code == 422

    assert client.get(f"/api/projects/{project_id}").json()["data_points"] == []


def test_table_without_calibration(client) -> None:
    project_id = _create_project(client)
    _track_accelerating(client, project_id)

    table = client.get(f"/api/projects/{project_id}/table").json()
    assert table["calibrated"] is False
    assert table["pixels_per_unit"] is None
    assert len(table["rows"]) == 5
    assert all(row["world_x"] is None and row["vx"] is None for row in table["rows"])


def test_table_with_calibration(client, calibrated_project) -> None:
    table = client.get(f"/api/projects/{calibrated_project}/table").json()

    assert table["calibrated"] is True
    assert table["pixels_per_unit"] == pytest.approx(100.0)
    rows = table["rows"]
    assert [r["row_number"] for r in rows] == [1, 2, 3, 4, 5]
    assert [r["world_x"] for r in rows] == pytest.approx([0.0, 0.5, 2.0, 4.5, 8.0])
    assert rows[0]["vx"] is None
    assert rows[1]["vx"] == pytest.approx(1.0)
    assert rows[2]["ax"] == pytest.approx(1.0)
    assert rows[3]["ax"] is None


def test_recalibration_keeps_pixels(client, calibrated_project) -> None:
    before = client.get(f"/api/projects/{calibrated_project}/table").json()["rows"]

    recalibrated = dict(CALIBRATION, scale_distance=2.0, scale_unit="cm")
    client.put(f"/api/projects/{calibrated_project}", json={"coordinate_system": recalibrated})
    table = client.get(f"/api/projects/{calibrated_project}/table").json()

    assert table["scale_unit"] == "cm"
    for old, new in zip(before, table["rows"]):
        assert new["pixel_x"] == old["pixel_x"]
        assert new["frame_number"] == old["frame_number"]
    assert table["rows"][4]["world_x"] == pytest.approx(16.0)


def test_move_point(client, calibrated_project) -> None:
    points = client.get(f"/api/projects/{calibrated_project}").json()["data_points"]
    target = points[2]

    response = client.patch(
        f"/api/projects/{calibrated_project}/points/{target['id']}",
        json={"pixel_x": 250.0, "pixel_y": 10.0},
    )
    assert response.status_code == 200
    moved = response.json()
    assert moved["pixel_x"] == 250.0
    assert moved["frame_number"] == target["frame_number"]

    missing = client.patch(
        f"/api/projects/{calibrated_project}/points/not-a-point",
        json={"pixel_x": 0.0, "pixel_y": 0.0},
    )
    assert missing.status_code == 404


def test_delete_points(client, calibrated_project) -> None:
    points = client.get(f"/api/projects/{calibrated_project}").json()["data_points"]
    ids = [points[0]["id"], "unknown"]

    response = client.request(
        "DELETE", f"/api/projects/{calibrated_project}/points", json={"point_ids": ids}
    )
    assert response.status_code == 200
    assert response.json()["deleted"] == [points[0]["id"]]

    rows = client.get(f"/api/projects/{calibrated_project}/table").json()["rows"]
    assert len(rows) == 4
    assert rows[0]["frame_number"] == 1
    assert rows[0]["vx"] is None


def test_regression_by_columns(client, calibrated_project) -> None:
    response = client.get(
        f"/api/projects/{calibrated_project}/regression", params={"x": "time", "y": "vx"}
    )
    body = response.json()

    assert body["point_count"] == 3
    assert body["y_label"] == "vx (m/s)"
    assert body["result"]["slope"] == pytest.approx(1.0)
    assert body["result"]["intercept"] == pytest.approx(0.0)
    assert body["result"]["r_squared"] == pytest.approx(1.0)


def test_regression_by_graph(client, calibrated_project) -> None:
    body = client.get(
        f"/api/projects/{calibrated_project}/regression", params={"graph": "y-t"}
    ).json()
    assert body["title"] == "Position Y vs Time"
    assert body["result"]["r_squared"] == 1.0


def test_regression_not_computable(client, calibrated_project) -> None:
    body = client.get(
        f"/api/projects/{calibrated_project}/regression", params={"x": "time", "y": "ax"}
    ).json()
    assert body["point_count"] == 1
    assert body["result"] is None


def test_regression_unknown_column(client, calibrated_project) -> None:
    response = client.get(
        f"/api/projects/{calibrated_project}/regression", params={"x": "time", "y": "jerk"}
    )
    assert response.status_code == 400


def test_export_csv(client, calibrated_project) -> None:
    response = client.get(f"/api/projects/{calibrated_project}/export")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "Ball-roll-motion-data.csv" in response.headers["content-disposition"]

    lines = response.text.split("\n")
    assert lines[0] == "#,t (s),x (m),y (m),vx (m/s),vy (m/s),|v| (m/s),ax (m/s²),ay (m/s²)"
    assert len(lines) == 6
    assert lines[1].startswith("1,0.0,0.0,")
    assert lines[1].endswith(",,,,,")


def test_share_project(client, calibrated_project) -> None:
    token = client.post(f"/api/projects/{calibrated_project}/share").json()["share_token"]

    shared = client.get(f"/api/share/{token}", headers={"X-User-Id": "someone-else"})
    assert shared.status_code == 200
    assert len(shared.json()["rows"]) == 5

    assert client.get("/api/share/not-a-token").status_code == 404
