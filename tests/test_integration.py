"""Integration test: snapshot → screen → plan avoidance → assess impact."""
from __future__ import annotations

from datetime import datetime, timezone

import numpy as np
import pytest

from orbrisk import (
    DEFAULT_PROPULSION,
    SATELLITE_PRESETS,
    OrbitalState,
    TrackedObject,
    assess_maneuver_impact,
    calculate_risk_score,
    create_collision_avoidance_maneuver,
    detect_collision_risks,
    predict_orbital_events,
    run_thermal_simulation,
)
from orbrisk.core.collision import classify_collision_probability
from orbrisk.core.propulsion import ManeuverPriority, Recommendation
from orbrisk.utils.constants import EARTH_RADIUS_KM as RE

START = datetime(2024, 2, 14, 13, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def snapshot() -> list[TrackedObject]:
    """Small LEO snapshot in Earth-radius units with one close pair."""
    rng = np.random.default_rng(2024)
    objects = []
    for i in range(40):
        direction = rng.normal(size=3)
        direction /= np.linalg.norm(direction)
        radius = 1.07 + 0.1 * rng.random()
        objects.append(TrackedObject(f"DEB-{i:03d}", direction * radius, rng.normal(size=3) * 4.0))

    host = objects[0]
    objects.append(TrackedObject("OWNSAT", host.position + np.array([3.0 / RE, 0, 0]), [0.0, 7.6, 0.0]))
    return objects


def test_screen_snapshot(snapshot: list[TrackedObject]):
    """The planted 3 km pair is the top risk."""
    risks = detect_collision_risks(snapshot)
    assert risks
    assert {risks[0].object1, risks[0].object2} == {"DEB-000", "OWNSAT"}
    assert risks[0].distance_km == pytest.approx(3.0)
    assert classify_collision_probability(risks[0].probability) == "critical"


def test_environment_summary(snapshot: list[TrackedObject]):
    """Score and event count are bounded for a realistic snapshot."""
    risks = detect_collision_risks(snapshot)
    score = calculate_risk_score(len(snapshot), risks)
    assert 10 <= score <= 100
    assert 0 <= predict_orbital_events(snapshot) <= 2 * len(snapshot)


def test_avoidance_pipeline(snapshot: list[TrackedObject]):
    """A critical conjunction leads to an executed avoidance burn."""
    top = detect_collision_risks(snapshot)[0]
    threat = classify_collision_probability(top.probability)

    maneuver = create_collision_avoidance_maneuver(DEFAULT_PROPULSION, threat, top.distance_km)
    assert maneuver.priority is ManeuverPriority.CRITICAL
    assert maneuver.delta_v_m_s == pytest.approx(1.25)

    impact = assess_maneuver_impact(DEFAULT_PROPULSION, maneuver)
    assert impact.recommendation is Recommendation.EXECUTE
    assert 0 < impact.margin_reduction < 1
    assert impact.lifetime_after.remaining_propellant_kg < DEFAULT_PROPULSION.propellant_mass_kg
    assert len(impact.alternative_strategies) == 2


def test_thermal_presets_run():
    """Every preset simulates an orbit without non-finite temperatures."""
    orbit = OrbitalState(altitude_km=420.0, inclination_rad=0.9, beta_angle_rad=0.3)
    for name, config in SATELLITE_PRESETS.items():
        prediction = run_thermal_simulation(config, orbit, START, 5400)
        assert len(prediction.timeline) == 91, name
        assert all(np.isfinite(s.temperature_k) for s in prediction.timeline), name
        assert 0 <= prediction.risk_score <= 100
