"""Thermal risk prediction for a spacecraft in a circular low Earth orbit.

A single-node heat balance (solar, albedo, Earth IR, internal dissipation,
radiated loss) is integrated with explicit forward Euler over a simplified
circular orbit. The run produces a temperature timeline, the windows during
which the spacecraft approached its limits and a list of mitigations.

Forward Euler is only stable while ``step * flux * area / (mass * c)`` stays
small; 30–60 s steps are stable for the bundled presets.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from enum import Enum

import numpy as np
from numpy.typing import ArrayLike, NDArray

from orbrisk.core.errors import InvalidConfigurationError
from orbrisk.utils.constants import (
    AU_KM,
    CRITICAL_MARGIN_K,
    DEFAULT_INITIAL_TEMPERATURE_K,
    DEFAULT_TIME_STEP_S,
    EARTH_ALBEDO,
    EARTH_IR_EMISSION_W_M2,
    EARTH_MU_M3_S2 as MU,
    EARTH_RADIUS_KM as RE,
    ECLIPSE_ALBEDO_FRACTION,
    HIGH_BETA_DEG,
    PROLONGED_SUN_S,
    SOLAR_CONSTANT_W_M2,
    SOLAR_OBLIQUITY_DEG,
    STEFAN_BOLTZMANN,
    WARNING_MARGIN_K,
)
from orbrisk.utils.rounding import round_half_up

logger = logging.getLogger(__name__)


class ThermalRiskLevel(Enum):
    """Per-step thermal risk classification."""

    NOMINAL = "nominal"
    WARNING = "warning"
    CRITICAL = "critical"


class RiskWindowType(Enum):
    """Condition that opened a risk window."""

    ECLIPSE_EXIT = "eclipse_exit"
    ECLIPSE_ENTRY = "eclipse_entry"
    HIGH_BETA = "high_beta"
    PROLONGED_SUN = "prolonged_sun"


class WindowSeverity(Enum):
    WARNING = "warning"
    CRITICAL = "critical"


class MitigationType(Enum):
    ATTITUDE_SLEW = "attitude_slew"
    DUTY_CYCLE = "duty_cycle"
    ORBIT_TIMING = "orbit_timing"
    HEATER_ACTIVATION = "heater_activation"


class MitigationPriority(Enum):
    REQUIRED = "required"
    RECOMMENDED = "recommended"
    OPTIONAL = "optional"


_WINDOW_DESCRIPTIONS = {
    RiskWindowType.ECLIPSE_EXIT: "Rapid temperature rise after eclipse exit due to sudden solar exposure",
    RiskWindowType.ECLIPSE_ENTRY: "Rapid temperature drop upon entering Earth shadow",
    RiskWindowType.HIGH_BETA: "Extended sun exposure due to high beta angle orbit geometry",
    RiskWindowType.PROLONGED_SUN: "Continuous solar heating without eclipse cooling cycles",
}


@dataclass(frozen=True)
class SpacecraftThermalConfig:
    """Thermal properties of a spacecraft treated as a single node.

    Attributes:
        name: Display name of the configuration.
        mass_kg: Total mass in kg.
        surface_area_m2: Exposed surface area in m².
        absorptivity: Solar absorptivity (0-1).
        emissivity: Infrared emissivity (0-1).
        specific_heat_j_kg_k: Specific heat in J/(kg·K).
        internal_power_w: Internal heat dissipation in W.
        min_temp_k: Minimum operational temperature in K.
        max_temp_k: Maximum operational temperature in K.
    """

    name: str
    mass_kg: float
    surface_area_m2: float
    absorptivity: float
    emissivity: float
    specific_heat_j_kg_k: float
    internal_power_w: float
    min_temp_k: float
    max_temp_k: float

    def validate(self) -> None:
        """Reject non-physical configurations.

        Raises:
            InvalidConfigurationError: If mass, surface area or specific heat
                is not positive, an optical property is outside [0, 1], or the
                temperature limits are inverted.
        """
        problems = []
        if self.mass_kg <= 0:
            problems.append(f"mass must be positive, got {self.mass_kg}")
        if self.surface_area_m2 <= 0:
            problems.append(f"surface area must be positive, got {self.surface_area_m2}")
        if self.specific_heat_j_kg_k <= 0:
            problems.append(f"specific heat must be positive, got {self.specific_heat_j_kg_k}")
        if not 0.0 <= self.absorptivity <= 1.0:
            problems.append(f"absorptivity must be in [0, 1], got {self.absorptivity}")
        if not 0.0 <= self.emissivity <= 1.0:
            problems.append(f"emissivity must be in [0, 1], got {self.emissivity}")
        if self.min_temp_k >= self.max_temp_k:
            problems.append(
                f"min temperature {self.min_temp_k} K must be below max temperature {self.max_temp_k} K"
            )

        if problems:
            message = f"Invalid thermal configuration {self.name!r}: " + "; ".join(problems)
            logger.error(message)
            raise InvalidConfigurationError(message)


DEFAULT_SATELLITE_CONFIG = SpacecraftThermalConfig(
    name="Default LEO Satellite",
    mass_kg=1000.0,
    surface_area_m2=20.0,
    absorptivity=0.3,
    emissivity=0.85,
    specific_heat_j_kg_k=900.0,  # aluminium
    internal_power_w=500.0,
    min_temp_k=223.0,  # -50 °C
    max_temp_k=373.0,  # 100 °C
)

CUBESAT_CONFIG = SpacecraftThermalConfig(
    name="CubeSat 3U",
    mass_kg=4.0,
    surface_area_m2=0.06,
    absorptivity=0.25,
    emissivity=0.9,
    specific_heat_j_kg_k=900.0,
    internal_power_w=8.0,
    min_temp_k=253.0,
    max_temp_k=343.0,
)

ISS_MODULE_CONFIG = SpacecraftThermalConfig(
    name="ISS Module",
    mass_kg=45000.0,
    surface_area_m2=1200.0,
    absorptivity=0.35,
    emissivity=0.85,
    specific_heat_j_kg_k=900.0,
    internal_power_w=75000.0,
    min_temp_k=283.0,
    max_temp_k=313.0,
)

SATELLITE_PRESETS: dict[str, SpacecraftThermalConfig] = {
    "default": DEFAULT_SATELLITE_CONFIG,
    "cubesat": CUBESAT_CONFIG,
    "iss": ISS_MODULE_CONFIG,
}


def get_preset(name: str) -> SpacecraftThermalConfig:
    """Look up a named thermal preset (``default``, ``cubesat`` or ``iss``)."""
    try:
        return SATELLITE_PRESETS[name.lower()]
    except KeyError:
        logger.error("Unknown thermal preset: %r", name)
        raise InvalidConfigurationError(
            f"Unknown thermal preset {name!r}, expected one of {sorted(SATELLITE_PRESETS)}"
        ) from None


@dataclass(frozen=True)
class OrbitalState:
    """Orbit geometry driving the thermal environment.

    Attributes:
        altitude_km: Circular orbit altitude in km.
        inclination_rad: Orbit inclination in radians.
        beta_angle_rad: Angle between the orbital plane and the Sun vector.
        position_km: [x, y, z] in km, used for the eclipse test. Defaults to
            the ascending node of the circular orbit.
    """

    altitude_km: float
    inclination_rad: float
    beta_angle_rad: float
    position_km: NDArray[np.float64] | None = None

    def __post_init__(self) -> None:
        if self.position_km is None:
            position = np.array([RE + self.altitude_km, 0.0, 0.0])
        else:
            position = np.asarray(self.position_km, dtype=np.float64)
        object.__setattr__(self, "position_km", position)


@dataclass
class HeatFluxes:
    """Absorbed and radiated heat fluxes in W/m² for one instant."""

    solar: float
    albedo: float
    earth_ir: float
    internal: float
    radiated: float
    net: float
    is_eclipse: bool


@dataclass
class ThermalState:
    """One timeline entry of a thermal simulation."""

    time: datetime
    temperature_k: float
    solar_flux: float
    albedo_flux: float
    earth_ir_flux: float
    internal_flux: float
    net_heat_flux: float
    is_eclipse: bool
    risk_level: ThermalRiskLevel


@dataclass
class RiskWindow:
    """A period during which the spacecraft was near its thermal limits.

    Attributes:
        start_time: Step at which the triggering condition was seen.
        end_time: Step at which the risk level returned to nominal.
        type: Condition that opened the window.
        severity: Critical if the window peak came within 20 K of the maximum.
        peak_temp_k: Highest temperature observed while the window was open.
        description: Human-readable explanation of the window type.
    """

    start_time: datetime
    end_time: datetime
    type: RiskWindowType
    severity: WindowSeverity
    peak_temp_k: float
    description: str


@dataclass
class Mitigation:
    type: MitigationType
    description: str
    impact_k: float  # expected temperature change
    priority: MitigationPriority


@dataclass
class ThermalPrediction:
    """Result of a thermal simulation run.

    Attributes:
        peak_temperature_k: Highest temperature over the run.
        min_temperature_k: Lowest temperature over the run.
        time_to_overheat_s: Seconds from start to the first step above the
            maximum limit, or None.
        time_to_underheat_s: Seconds from start to the first step below the
            minimum limit, or None.
        risk_score: Aggregate risk score (0-100).
        risk_windows: Closed risk windows in time order.
        mitigations: Recommended mitigations.
        timeline: One ThermalState per step.
    """

    peak_temperature_k: float
    min_temperature_k: float
    time_to_overheat_s: float | None
    time_to_underheat_s: float | None
    risk_score: int
    risk_windows: list[RiskWindow] = field(default_factory=list)
    mitigations: list[Mitigation] = field(default_factory=list)
    timeline: list[ThermalState] = field(default_factory=list)


@dataclass
class RiskWindowTracker:
    """Opens and closes risk windows over consecutive simulation steps.

    At most one window is open at a time. While none is open, a step can
    open one on an eclipse exit, an eclipse entry, more than an hour of
    continuous sunlight, or a high beta angle, checked in that order. A
    window closes on the first nominal step, which may be the step that
    opened it. Whatever is still open when the caller stops stepping is
    never reported.

    Attributes:
        config: Spacecraft whose maximum limit sets window severity.
        high_beta: Whether the orbit's beta angle exceeds 60°.
    """

    config: SpacecraftThermalConfig
    high_beta: bool = False
    window_type: RiskWindowType | None = field(default=None, init=False)
    start_time: datetime | None = field(default=None, init=False)
    peak_temp_k: float = field(default=0.0, init=False)
    was_eclipse: bool = field(default=False, init=False)

    @property
    def is_open(self) -> bool:
        return self.window_type is not None

    def _trigger(self, is_eclipse: bool, sun_exposure_s: float) -> RiskWindowType | None:
        if self.was_eclipse and not is_eclipse:
            return RiskWindowType.ECLIPSE_EXIT
        elif not self.was_eclipse and is_eclipse:
            return RiskWindowType.ECLIPSE_ENTRY
        elif not is_eclipse and sun_exposure_s > PROLONGED_SUN_S:
            return RiskWindowType.PROLONGED_SUN
        elif self.high_beta:
            return RiskWindowType.HIGH_BETA
        return None

    def update(
        self,
        time: datetime,
        temperature_k: float,
        risk_level: ThermalRiskLevel,
        is_eclipse: bool,
        sun_exposure_s: float,
    ) -> RiskWindow | None:
        """Advance by one step.

        Args:
            time: Time of the step.
            temperature_k: Temperature after the step.
            risk_level: Risk level of that temperature.
            is_eclipse: Whether the spacecraft is in shadow at this step.
            sun_exposure_s: Continuous sunlight so far, including this step.

        Returns:
            The window closed by this step, or None.
        """
        if self.window_type is None:
            self.window_type = self._trigger(is_eclipse, sun_exposure_s)
            if self.window_type is not None:
                self.start_time = time
                self.peak_temp_k = temperature_k
        else:
            self.peak_temp_k = max(self.peak_temp_k, temperature_k)

        closed = None
        if self.window_type is not None and risk_level is ThermalRiskLevel.NOMINAL:
            closed = RiskWindow(
                start_time=self.start_time,
                end_time=time,
                type=self.window_type,
                severity=(
                    WindowSeverity.CRITICAL
                    if self.peak_temp_k > self.config.max_temp_k - 20
                    else WindowSeverity.WARNING
                ),
                peak_temp_k=self.peak_temp_k,
                description=_WINDOW_DESCRIPTIONS[self.window_type],
            )
            self.window_type = None
            self.start_time = None

        self.was_eclipse = is_eclipse
        return closed


def calculate_beta_angle(
    inclination: float,
    right_ascension: float,
    sun_declination: float,
    sun_right_ascension: float,
) -> float:
    """Beta angle in radians from orbit orientation and Sun direction."""
    gamma = sun_right_ascension - right_ascension
    return math.asin(
        math.cos(sun_declination) * math.sin(inclination) * math.sin(gamma)
        + math.sin(sun_declination) * math.cos(inclination)
    )


def _as_utc(t: datetime) -> datetime:
    if t.tzinfo is None:
        return t.replace(tzinfo=timezone.utc)
    return t.astimezone(timezone.utc)


def get_sun_vector(time: datetime) -> NDArray[np.float64]:
    """Approximate Sun position in km for a UTC time.

    Uses a cosine declination model keyed on day of year and an hour angle
    keyed on time of day. Only the direction is meaningful.
    """
    t = _as_utc(time)
    day_zero = datetime(t.year - 1, 12, 31, tzinfo=timezone.utc)
    day_of_year = (t - day_zero) // timedelta(days=1)
    hour_of_day = t.hour + t.minute / 60

    declination = math.radians(
        -SOLAR_OBLIQUITY_DEG * math.cos(math.radians((360 / 365) * (day_of_year + 10)))
    )
    hour_angle = math.radians((hour_of_day - 12) * 15)

    direction = np.array([
        math.cos(declination) * math.cos(hour_angle),
        math.cos(declination) * math.sin(hour_angle),
        math.sin(declination),
    ])
    return direction * AU_KM


def is_in_eclipse(position: ArrayLike, sun_vector: ArrayLike) -> bool:
    """Cylindrical-shadow eclipse test.

    The satellite is eclipsed when the angle between its position and the
    anti-Sun direction is smaller than Earth's angular radius seen from the
    satellite's orbital radius.
    """
    pos = np.asarray(position, dtype=np.float64)
    sun = np.asarray(sun_vector, dtype=np.float64)

    sat_radius = max(float(np.linalg.norm(pos)), 1e-9)
    sun_distance = max(float(np.linalg.norm(sun)), 1e-9)

    dot = float(np.dot(pos / sat_radius, sun / sun_distance))

    # at or below the surface the Earth fills half the sky
    earth_angular_radius = math.asin(min(1.0, RE / sat_radius))
    anti_sun_angle = math.acos(max(-1.0, min(1.0, -dot)))

    return anti_sun_angle < earth_angular_radius


def earth_view_factor(altitude_km: float) -> float:
    """View factor from a flat plate to Earth at the given altitude."""
    rho = RE / (RE + max(altitude_km, 0.0))
    return 0.5 * (1 - math.sqrt(1 - rho * rho))


def calculate_heat_fluxes(
    config: SpacecraftThermalConfig,
    orbital_state: OrbitalState,
    sun_vector: ArrayLike,
    temperature_k: float,
) -> HeatFluxes:
    """Heat flux balance for the spacecraft at one instant.

    Albedo is reduced to 10 % rather than zeroed in eclipse; Earth IR does
    not depend on illumination.
    """
    eclipse = is_in_eclipse(orbital_state.position_km, sun_vector)
    view_factor = earth_view_factor(orbital_state.altitude_km)

    solar = 0.0 if eclipse else SOLAR_CONSTANT_W_M2 * config.absorptivity

    albedo = SOLAR_CONSTANT_W_M2 * EARTH_ALBEDO * view_factor * config.absorptivity
    if eclipse:
        albedo *= ECLIPSE_ALBEDO_FRACTION

    earth_ir = EARTH_IR_EMISSION_W_M2 * view_factor * config.emissivity
    internal = config.internal_power_w / config.surface_area_m2
    radiated = config.emissivity * STEFAN_BOLTZMANN * temperature_k ** 4

    return HeatFluxes(
        solar=solar,
        albedo=albedo,
        earth_ir=earth_ir,
        internal=internal,
        radiated=radiated,
        net=solar + albedo + earth_ir + internal - radiated,
        is_eclipse=eclipse,
    )


def propagate_temperature(
    config: SpacecraftThermalConfig,
    temperature_k: float,
    net_heat_flux: float,
    dt_s: float,
) -> float:
    """Advance temperature by one explicit Euler step of dt_s seconds."""
    thermal_mass = config.mass_kg * config.specific_heat_j_kg_k
    heat_input = net_heat_flux * config.surface_area_m2 * dt_s
    return temperature_k + heat_input / thermal_mass


def orbital_position(orbital_state: OrbitalState, elapsed_s: float) -> NDArray[np.float64]:
    """Position in km on the circular orbit after elapsed_s seconds."""
    radius_km = RE + orbital_state.altitude_km
    period = 2 * math.pi * math.sqrt((radius_km * 1000) ** 3 / MU)
    angle = (2 * math.pi / period) * elapsed_s
    inc = orbital_state.inclination_rad

    return np.array([
        radius_km * math.cos(angle) * math.cos(inc),
        radius_km * math.sin(angle),
        radius_km * math.cos(angle) * math.sin(inc),
    ])


def classify_risk_level(config: SpacecraftThermalConfig, temperature_k: float) -> ThermalRiskLevel:
    """Risk level from the tighter of the two margins to the limits."""
    margin = min(config.max_temp_k - temperature_k, temperature_k - config.min_temp_k)
    if margin < CRITICAL_MARGIN_K:
        return ThermalRiskLevel.CRITICAL
    elif margin < WARNING_MARGIN_K:
        return ThermalRiskLevel.WARNING
    return ThermalRiskLevel.NOMINAL


def run_thermal_simulation(
    config: SpacecraftThermalConfig,
    orbital_state: OrbitalState,
    start_time: datetime,
    duration_seconds: float,
    step_seconds: float = DEFAULT_TIME_STEP_S,
    initial_temperature_k: float = DEFAULT_INITIAL_TEMPERATURE_K,
) -> ThermalPrediction:
    """Simulate spacecraft temperature over a circular orbit.

    The run has ``floor(duration / step) + 1`` steps. At each step the
    position and Sun vector are recomputed, fluxes evaluated at the current
    temperature and the temperature advanced by one Euler step.

    Risk windows: at most one is open at a time. A window opens on an
    eclipse exit or entry, after more than an hour of continuous sunlight,
    or when the beta angle exceeds 60°, whichever fires first; it closes on
    the first nominal step. A window still open at the end is discarded.

    Args:
        config: Spacecraft thermal properties.
        orbital_state: Orbit altitude, inclination and beta angle.
        start_time: UTC start of the run. Naive datetimes are taken as UTC.
        duration_seconds: Length of the run in seconds.
        step_seconds: Integration step in seconds.
        initial_temperature_k: Temperature at the start of the run.

    Returns:
        ThermalPrediction with timeline, risk windows and mitigations.

    Raises:
        InvalidConfigurationError: For a non-physical configuration, a
            non-positive step or a negative duration.
    """
    config.validate()
    if step_seconds <= 0:
        logger.error("Invalid simulation step: %s s", step_seconds)
        raise InvalidConfigurationError(f"Simulation step must be positive, got {step_seconds}")
    if duration_seconds < 0:
        logger.error("Invalid simulation duration: %s s", duration_seconds)
        raise InvalidConfigurationError(f"Simulation duration must not be negative, got {duration_seconds}")

    start = _as_utc(start_time)
    steps = math.floor(duration_seconds / step_seconds)
    high_beta = abs(orbital_state.beta_angle_rad) > math.radians(HIGH_BETA_DEG)

    timeline: list[ThermalState] = []
    windows: list[RiskWindow] = []

    temperature = initial_temperature_k
    peak_temp = temperature
    min_temp = temperature
    time_to_overheat: float | None = None
    time_to_underheat: float | None = None

    tracker = RiskWindowTracker(config, high_beta=high_beta)
    sun_exposure_s = 0.0

    for i in range(steps + 1):
        elapsed = i * step_seconds
        now = start + timedelta(seconds=elapsed)

        state = replace(orbital_state, position_km=orbital_position(orbital_state, elapsed))
        fluxes = calculate_heat_fluxes(config, state, get_sun_vector(now), temperature)
        temperature = propagate_temperature(config, temperature, fluxes.net, step_seconds)

        peak_temp = max(peak_temp, temperature)
        min_temp = min(min_temp, temperature)

        if temperature > config.max_temp_k and time_to_overheat is None:
            time_to_overheat = elapsed
        if temperature < config.min_temp_k and time_to_underheat is None:
            time_to_underheat = elapsed

        risk_level = classify_risk_level(config, temperature)
        eclipse = fluxes.is_eclipse

        if eclipse:
            sun_exposure_s = 0.0
        else:
            sun_exposure_s += step_seconds

        closed = tracker.update(now, temperature, risk_level, eclipse, sun_exposure_s)
        if closed is not None:
            windows.append(closed)

        timeline.append(
            ThermalState(
                time=now,
                temperature_k=temperature,
                solar_flux=fluxes.solar,
                albedo_flux=fluxes.albedo,
                earth_ir_flux=fluxes.earth_ir,
                internal_flux=fluxes.internal,
                net_heat_flux=fluxes.net,
                is_eclipse=eclipse,
                risk_level=risk_level,
            )
        )

    if tracker.is_open:
        logger.debug("Dropping %s window still open at end of run", tracker.window_type.value)

    risk_score = _thermal_risk_score(config, peak_temp, min_temp, windows)
    mitigations = generate_mitigations(config, peak_temp, min_temp, windows)

    logger.debug(
        "Thermal simulation %r: %d steps, peak=%.1f K, min=%.1f K, %d windows, score=%d",
        config.name, len(timeline), peak_temp, min_temp, len(windows), risk_score,
    )
    return ThermalPrediction(
        peak_temperature_k=peak_temp,
        min_temperature_k=min_temp,
        time_to_overheat_s=time_to_overheat,
        time_to_underheat_s=time_to_underheat,
        risk_score=risk_score,
        risk_windows=windows,
        mitigations=mitigations,
        timeline=timeline,
    )


def _thermal_risk_score(
    config: SpacecraftThermalConfig,
    peak_temp: float,
    min_temp: float,
    windows: list[RiskWindow],
) -> int:
    """Temperature-range term (up to 50) plus 15/8 per critical/warning window."""
    range_risk = max(
        (peak_temp - config.max_temp_k + 50) / 100,
        (config.min_temp_k - min_temp + 50) / 100,
        0.0,
    ) * 50

    window_risk = sum(15 if w.severity is WindowSeverity.CRITICAL else 8 for w in windows)

    return min(100, int(round_half_up(range_risk + window_risk)))


def generate_mitigations(
    config: SpacecraftThermalConfig,
    peak_temp: float,
    min_temp: float,
    windows: list[RiskWindow],
) -> list[Mitigation]:
    """Mitigations for the extremes and window types of a finished run."""
    mitigations: list[Mitigation] = []

    if peak_temp > config.max_temp_k - 30:
        mitigations.append(Mitigation(
            type=MitigationType.ATTITUDE_SLEW,
            description="Rotate spacecraft to reduce solar panel exposure and increase radiator view to cold space",
            impact_k=-15.0,
            priority=(
                MitigationPriority.REQUIRED
                if peak_temp > config.max_temp_k
                else MitigationPriority.RECOMMENDED
            ),
        ))
        mitigations.append(Mitigation(
            type=MitigationType.DUTY_CYCLE,
            description="Reduce payload duty cycle by 25% to decrease internal heat generation",
            impact_k=-8.0,
            priority=MitigationPriority.RECOMMENDED,
        ))

    if min_temp < config.min_temp_k + 30:
        mitigations.append(Mitigation(
            type=MitigationType.HEATER_ACTIVATION,
            description="Activate survival heaters to maintain minimum temperature during eclipse",
            impact_k=12.0,
            priority=(
                MitigationPriority.REQUIRED
                if min_temp < config.min_temp_k
                else MitigationPriority.RECOMMENDED
            ),
        ))
        mitigations.append(Mitigation(
            type=MitigationType.ATTITUDE_SLEW,
            description="Orient spacecraft to maximize solar absorption during eclipse exit",
            impact_k=10.0,
            priority=MitigationPriority.OPTIONAL,
        ))

    transitions = (RiskWindowType.ECLIPSE_EXIT, RiskWindowType.ECLIPSE_ENTRY)
    if any(w.type in transitions for w in windows):
        mitigations.append(Mitigation(
            type=MitigationType.ORBIT_TIMING,
            description="Schedule high-power operations away from eclipse transitions to buffer thermal swings",
            impact_k=-5.0,
            priority=MitigationPriority.OPTIONAL,
        ))

    if any(w.type is RiskWindowType.HIGH_BETA for w in windows):
        mitigations.append(Mitigation(
            type=MitigationType.ATTITUDE_SLEW,
            description="Implement beta-angle management attitude profile to balance thermal load",
            impact_k=-12.0,
            priority=MitigationPriority.RECOMMENDED,
        ))

    return mitigations


def kelvin_to_celsius(k: float) -> float:
    return k - 273.15


def format_duration(seconds: float) -> str:
    """Format a duration as ``45s``, ``2m 5s`` or ``1h 30m``."""
    seconds = int(seconds)
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        return f"{seconds // 60}m {seconds % 60}s"
    return f"{seconds // 3600}h {(seconds % 3600) // 60}m"
