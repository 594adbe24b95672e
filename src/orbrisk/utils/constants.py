"""Physical constants and default thresholds for the risk engines.

All values in SI units unless otherwise noted.
"""

from __future__ import annotations

# --- Earth parameters ---
EARTH_RADIUS_KM: float = 6371.0
"""Mean radius of Earth in km. Also the scene unit of normalised positions."""

EARTH_MU_M3_S2: float = 3.986e14
"""Earth gravitational parameter (GM) in m³/s²."""

EARTH_IR_EMISSION_W_M2: float = 237.0
"""Average outgoing long-wave (infrared) emission of Earth in W/m²."""

EARTH_ALBEDO: float = 0.3
"""Average Bond albedo of Earth."""

# --- Sun ---
SOLAR_CONSTANT_W_M2: float = 1361.0
"""Total solar irradiance at 1 AU in W/m²."""

AU_KM: float = 149597870.7
"""Astronomical unit in km."""

SOLAR_OBLIQUITY_DEG: float = 23.45
"""Amplitude of the simplified solar declination model in degrees."""

STEFAN_BOLTZMANN: float = 5.67e-8
"""Stefan-Boltzmann constant in W/(m²·K⁴)."""

# --- Propulsion ---
G0_M_S2: float = 9.80665
"""Standard gravity in m/s², used to convert Isp to exhaust velocity."""

# --- Collision screening ---
MIN_RELATIVE_SPEED: float = 0.1
"""Floor on relative speed when estimating time to closest approach."""

COLLISION_PROBABILITY_BANDS: tuple[tuple[float, float], ...] = (
    (5.0, 0.85),
    (25.0, 0.45),
    (100.0, 0.15),
    (500.0, 0.02),
)
"""Upper distance bound in km (exclusive) and probability for each band."""

MIN_REPORTED_PROBABILITY: float = 0.01
"""Pairs at or below this probability are not reported as risks."""

CATALOG_SATURATION_OBJECTS: int = 2000
"""Object count at which the congestion term of the risk score saturates."""

# --- Thermal simulation ---
DEFAULT_TIME_STEP_S: float = 60.0
"""Default forward-Euler step in seconds."""

DEFAULT_INITIAL_TEMPERATURE_K: float = 293.0
"""Spacecraft temperature at the start of a simulation (20 °C)."""

CRITICAL_MARGIN_K: float = 10.0
"""Margin to a temperature limit below which a step is critical."""

WARNING_MARGIN_K: float = 30.0
"""Margin to a temperature limit below which a step is a warning."""

PROLONGED_SUN_S: float = 3600.0
"""Continuous sunlit time after which a prolonged-sun window opens."""

HIGH_BETA_DEG: float = 60.0
"""Beta angle magnitude above which a high-beta window opens."""

ECLIPSE_ALBEDO_FRACTION: float = 0.1
"""Fraction of albedo heating kept while in eclipse."""
