"""
Central-difference velocity and acceleration.

For N time-ordered world samples:
- velocity is defined at indices 1..N-2
- acceleration is defined at indices 2..N-3

Endpoints never get an estimate; one-sided differences are not used.
Zero time spans between neighbours (duplicate timestamps) give None.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class WorldSample:
    """A world-space position at a point in time."""
    time: float
    x: float
    y: float


@dataclass(frozen=True)
class Velocity:
    vx: float
    vy: float
    speed: float


@dataclass(frozen=True)
class Acceleration:
    ax: float
    ay: float


def calculate_velocity(data: Sequence[WorldSample], index: int) -> Optional[Velocity]:
    """Velocity at index from its two neighbours. None at either end."""
    if index <= 0 or index >= len(data) - 1:
        return None

    prev = data[index - 1]
    nxt = data[index + 1]
    dt = nxt.time - prev.time
    if dt == 0:
        return None

    vx = (nxt.x - prev.x) / dt
    vy = (nxt.y - prev.y) / dt
    return Velocity(vx=vx, vy=vy, speed=math.sqrt(vx * vx + vy * vy))


def calculate_acceleration(data: Sequence[WorldSample], index: int) -> Optional[Acceleration]:
    """
    Acceleration at index as the central difference of the neighbouring
    velocities. Needs two samples on each side.
    """
    if index <= 1 or index >= len(data) - 2:
        return None

    v_prev = calculate_velocity(data, index - 1)
    v_next = calculate_velocity(data, index + 1)
    if v_prev is None or v_next is None:
        return None

    dt = data[index + 1].time - data[index - 1].time
    if dt == 0:
        return None

    return Acceleration(
        ax=(v_next.vx - v_prev.vx) / dt,
        ay=(v_next.vy - v_prev.vy) / dt,
    )


def compute_kinematics(
    data: Sequence[WorldSample],
) -> List[Tuple[Optional[Velocity], Optional[Acceleration]]]:
    """Velocity and acceleration for every index of the sequence."""
    return [
        (calculate_velocity(data, i), calculate_acceleration(data, i))
        for i in range(len(data))
    ]
