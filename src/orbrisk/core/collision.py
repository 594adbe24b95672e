"""Collision screening — rank close approaches in a tracked-object snapshot.

Positions are in Earth-radius-normalised scene units (1.0 = one Earth
radius), velocities in the same frame as supplied by the propagator.
Probabilities are coarse distance bands, not a covariance-based Pc.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.spatial.distance import pdist

from orbrisk.utils.constants import (
    CATALOG_SATURATION_OBJECTS,
    COLLISION_PROBABILITY_BANDS,
    EARTH_RADIUS_KM as RE,
    MIN_RELATIVE_SPEED,
    MIN_REPORTED_PROBABILITY,
)
from orbrisk.utils.rounding import round_half_up

logger = logging.getLogger(__name__)


@dataclass
class TrackedObject:
    """A tracked object at a single instant.

    Attributes:
        name: Identifier of the object.
        position: [x, y, z] in Earth radii.
        velocity: [vx, vy, vz] in the propagator's velocity units.
    """

    name: str
    position: NDArray[np.float64]  # shape (3,)
    velocity: NDArray[np.float64]  # shape (3,)

    def __post_init__(self) -> None:
        self.position = np.asarray(self.position, dtype=np.float64)
        self.velocity = np.asarray(self.velocity, dtype=np.float64)


@dataclass
class CollisionResult:
    """Geometry and banded probability for one pair of objects."""

    distance_km: float
    probability: float
    time_to_closest_s: float


@dataclass
class CollisionRisk:
    """A reported close approach between two tracked objects.

    Attributes:
        object1: Name of the first object.
        object2: Name of the second object.
        distance_km: Current separation in km.
        probability: Banded collision probability in [0, 1].
        time_to_closest_approach_s: Separation over relative speed.
    """

    object1: str
    object2: str
    distance_km: float
    probability: float
    time_to_closest_approach_s: float


def probability_for_distance(distance_km: float) -> float:
    """Map a separation in km to its probability band."""
    for upper_km, probability in COLLISION_PROBABILITY_BANDS:
        if distance_km < upper_km:
            return probability
    return 0.0


def calculate_collision_probability(
    pos1: ArrayLike,
    vel1: ArrayLike,
    pos2: ArrayLike,
    vel2: ArrayLike,
) -> CollisionResult:
    """Estimate collision probability between two objects.

    The normalised separation is scaled by the Earth radius component by
    component before taking the norm. The distance bands were calibrated
    against this exact formula.

    Args:
        pos1: Position of the first object (Earth radii).
        vel1: Velocity of the first object.
        pos2: Position of the second object (Earth radii).
        vel2: Velocity of the second object.

    Returns:
        CollisionResult with distance in km, banded probability and time to
        closest approach in seconds.
    """
    delta = (np.asarray(pos1, dtype=np.float64) - np.asarray(pos2, dtype=np.float64)) * RE
    distance = float(np.linalg.norm(delta))

    relative_speed = float(np.linalg.norm(
        np.asarray(vel1, dtype=np.float64) - np.asarray(vel2, dtype=np.float64)
    ))
    time_to_closest = distance / max(relative_speed, MIN_RELATIVE_SPEED)

    return CollisionResult(
        distance_km=distance,
        probability=probability_for_distance(distance),
        time_to_closest_s=time_to_closest,
    )


def detect_collision_risks(objects: Sequence[TrackedObject]) -> list[CollisionRisk]:
    """Scan all pairs of objects for collision risks.

    Pairwise distances and relative speeds are computed in one vectorised
    pass; pair order follows (i, j) with i < j, so ties keep scan order.

    Args:
        objects: Snapshot of tracked objects.

    Returns:
        Risks with probability above 1 %, sorted by probability (highest first).
    """
    n = len(objects)
    if n < 2:
        return []

    positions = np.vstack([obj.position for obj in objects]) * RE
    velocities = np.vstack([obj.velocity for obj in objects])

    distances = pdist(positions)
    speeds = pdist(velocities)
    pair_i, pair_j = np.triu_indices(n, k=1)

    logger.debug("detect_collision_risks: scanning %d pairs", len(distances))

    risks: list[CollisionRisk] = []
    for k, distance in enumerate(distances):
        distance = float(distance)
        probability = probability_for_distance(distance)
        if probability <= MIN_REPORTED_PROBABILITY:
            continue
        risks.append(
            CollisionRisk(
                object1=objects[int(pair_i[k])].name,
                object2=objects[int(pair_j[k])].name,
                distance_km=distance,
                probability=probability,
                time_to_closest_approach_s=distance / max(float(speeds[k]), MIN_RELATIVE_SPEED),
            )
        )

    risks.sort(key=lambda r: r.probability, reverse=True)
    logger.info("detect_collision_risks: %d objects, %d risks", n, len(risks))
    return risks


def calculate_risk_score(total_objects: int, risks: Sequence[CollisionRisk]) -> int:
    """Aggregate orbital risk score for the current snapshot.

    Combines catalog congestion (up to 30), individual high-probability
    conjunctions (10 per critical, 5 per high) and conjunction density
    (up to 20).

    Returns:
        Integer score in [0, 100].
    """
    congestion = min(total_objects / CATALOG_SATURATION_OBJECTS, 1.0) * 30

    critical = sum(1 for r in risks if r.probability > 0.5)
    high = sum(1 for r in risks if 0.2 < r.probability <= 0.5)
    collision = critical * 10 + high * 5

    density = min(len(risks) / 100, 1.0) * 20

    score = min(congestion + collision + density, 100.0)
    return int(round_half_up(max(score, 0.0)))


def classify_collision_probability(probability: float) -> str:
    """Threat level used when planning an avoidance maneuver for a risk."""
    if probability > 0.5:
        return "critical"
    elif probability > 0.2:
        return "high"
    elif probability > 0.1:
        return "medium"
    else:
        return "low"


def predict_orbital_events(objects: Sequence[TrackedObject]) -> int:
    """Count objects flagged by snapshot heuristics.

    Each object scores one point per flag: radius below 1.15 Earth radii
    (reentry candidate), speed above 8 or below 6 (non-nominal orbit) and
    radius in the 2.5–6 Earth radii transfer band. No propagation is done.
    """
    if not objects:
        return 0

    radii = np.linalg.norm(np.vstack([obj.position for obj in objects]), axis=1)
    speeds = np.linalg.norm(np.vstack([obj.velocity for obj in objects]), axis=1)

    low_orbit = radii < 1.15
    off_nominal_speed = (speeds > 8) | (speeds < 6)
    transfer_band = (radii > 2.5) & (radii < 6)

    return int(low_orbit.sum() + off_nominal_speed.sum() + transfer_band.sum())
