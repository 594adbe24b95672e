"""orbrisk Quickstart — screen a snapshot, size an avoidance burn, check thermal risk."""

from datetime import datetime, timezone

from orbrisk import (
    DEFAULT_PROPULSION,
    OrbitalState,
    SATELLITE_PRESETS,
    TrackedObject,
    assess_maneuver_impact,
    create_collision_avoidance_maneuver,
    detect_collision_risks,
    run_thermal_simulation,
)
from orbrisk.core.collision import classify_collision_probability
from orbrisk.core.propulsion import format_delta_v, format_lifetime, format_propellant
from orbrisk.core.thermal import format_duration, kelvin_to_celsius

# Positions in Earth radii, velocities in km/s
snapshot = [
    TrackedObject("OWNSAT", [1.0628, 0.0, 0.0], [0.0, 7.66, 0.0]),
    TrackedObject("DEB-1", [1.0631, 0.0002, 0.0], [0.0, -7.2, 1.1]),
    TrackedObject("DEB-2", [1.0628, 0.03, 0.0], [0.1, 7.6, 0.0]),
]

risks = detect_collision_risks(snapshot)
for r in risks:
    print(f"{r.object1} / {r.object2}: {r.distance_km:.2f} km, P={r.probability:.2f}")

top = risks[0]
maneuver = create_collision_avoidance_maneuver(
    DEFAULT_PROPULSION, classify_collision_probability(top.probability), top.distance_km,
)
impact = assess_maneuver_impact(DEFAULT_PROPULSION, maneuver)

print(f"\n{maneuver.description}")
print(f"Δv:          {format_delta_v(maneuver.delta_v_m_s)}")
print(f"Propellant:  {format_propellant(maneuver.propellant_required_kg)}")
print(f"Lifetime:    {format_lifetime(impact.lifetime_after.estimated_lifetime_days)} remaining")
print(f"Decision:    {impact.recommendation.value}")

orbit = OrbitalState(altitude_km=400.0, inclination_rad=0.9, beta_angle_rad=0.3)
prediction = run_thermal_simulation(SATELLITE_PRESETS["cubesat"], orbit, datetime.now(timezone.utc), 10800)

print(f"\nPeak:        {kelvin_to_celsius(prediction.peak_temperature_k):.1f} °C")
print(f"Min:         {kelvin_to_celsius(prediction.min_temperature_k):.1f} °C")
print(f"Risk score:  {prediction.risk_score}")
if prediction.time_to_overheat_s is not None:
    print(f"Overheat in  {format_duration(prediction.time_to_overheat_s)}")
for m in prediction.mitigations:
    print(f"  [{m.priority.value}] {m.description}")
