"""
orbrisk — Spacecraft operational risk in low Earth orbit.

Three independent engines: collision screening over a tracked-object
snapshot, thermal risk prediction over a simplified circular orbit, and
propellant / mission-lifetime budgeting from the rocket equation.
"""

from __future__ import annotations

__version__ = "0.1.0-dev"

from orbrisk.core.errors import OrbRiskError, InvalidConfigurationError, ImpossibleManeuverError
from orbrisk.core.collision import (
    TrackedObject,
    CollisionRisk,
    calculate_collision_probability,
    detect_collision_risks,
    calculate_risk_score,
    predict_orbital_events,
)
from orbrisk.core.thermal import (
    SpacecraftThermalConfig,
    OrbitalState,
    ThermalPrediction,
    SATELLITE_PRESETS,
    run_thermal_simulation,
)
from orbrisk.core.propulsion import (
    SpacecraftPropulsion,
    ManeuverPlan,
    MissionLifetimeState,
    ManeuverImpact,
    DEFAULT_PROPULSION,
    calculate_delta_v,
    calculate_propellant_required,
    calculate_mission_lifetime_state,
    create_collision_avoidance_maneuver,
    assess_maneuver_impact,
    calculate_burn_duration,
)
from orbrisk.data.stats import SpaceStats, SpaceStatsCache

__all__ = [
    "__version__",
    "OrbRiskError",
    "InvalidConfigurationError",
    "ImpossibleManeuverError",
    "TrackedObject",
    "CollisionRisk",
    "calculate_collision_probability",
    "detect_collision_risks",
    "calculate_risk_score",
    "predict_orbital_events",
    "SpacecraftThermalConfig",
    "OrbitalState",
    "ThermalPrediction",
    "SATELLITE_PRESETS",
    "run_thermal_simulation",
    "SpacecraftPropulsion",
    "ManeuverPlan",
    "MissionLifetimeState",
    "ManeuverImpact",
    "DEFAULT_PROPULSION",
    "calculate_delta_v",
    "calculate_propellant_required",
    "calculate_mission_lifetime_state",
    "create_collision_avoidance_maneuver",
    "assess_maneuver_impact",
    "calculate_burn_duration",
    "SpaceStats",
    "SpaceStatsCache",
]
