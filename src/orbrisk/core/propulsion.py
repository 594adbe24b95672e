"""Propellant budgeting and mission lifetime from the rocket equation.

All functions are closed-form: a propulsion state and a Δv (or propellant
mass) in, a number or record out. Applying a maneuver never mutates the
input state; a post-maneuver copy is derived instead.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from enum import Enum

from orbrisk.core.errors import ImpossibleManeuverError, InvalidConfigurationError
from orbrisk.utils.constants import G0_M_S2 as G0
from orbrisk.utils.rounding import round_half_up

logger = logging.getLogger(__name__)


class ManeuverType(Enum):
    COLLISION_AVOIDANCE = "collision_avoidance"
    STATION_KEEPING = "station_keeping"
    ORBIT_RAISE = "orbit_raise"
    DEORBIT = "deorbit"
    ATTITUDE_CORRECTION = "attitude_correction"


class ManeuverPriority(Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Threat levels share the priority scale; an avoidance maneuver inherits
# the threat level as its priority.
ThreatLevel = ManeuverPriority


class LifetimeStatus(Enum):
    NOMINAL = "nominal"
    CAUTION = "caution"
    WARNING = "warning"
    CRITICAL = "critical"


class Recommendation(Enum):
    EXECUTE = "execute"
    DEFER = "defer"
    OPTIMIZE = "optimize"
    REJECT = "reject"


@dataclass(frozen=True)
class SpacecraftPropulsion:
    """Propulsion state of a spacecraft.

    Attributes:
        dry_mass_kg: Mass without propellant.
        propellant_mass_kg: Propellant currently on board.
        initial_propellant_kg: Propellant at beginning of life.
        specific_impulse_s: Isp of the propulsion system in seconds.
        thrust_n: Nominal thrust in newtons.
        min_propellant_reserve_kg: Reserve kept for end-of-life disposal.
    """

    dry_mass_kg: float
    propellant_mass_kg: float
    initial_propellant_kg: float
    specific_impulse_s: float
    thrust_n: float
    min_propellant_reserve_kg: float

    @property
    def wet_mass_kg(self) -> float:
        return self.dry_mass_kg + self.propellant_mass_kg

    @property
    def exhaust_velocity_m_s(self) -> float:
        return self.specific_impulse_s * G0

    def with_propellant(self, propellant_mass_kg: float) -> SpacecraftPropulsion:
        """Copy of this state with a different propellant load."""
        return replace(self, propellant_mass_kg=propellant_mass_kg)

    def validate(self) -> None:
        """Reject non-physical propulsion states.

        Raises:
            InvalidConfigurationError: If dry mass, Isp or initial propellant
                is not positive, or a mass or thrust is negative.
        """
        problems = []
        if self.dry_mass_kg <= 0:
            problems.append(f"dry mass must be positive, got {self.dry_mass_kg}")
        if self.specific_impulse_s <= 0:
            problems.append(f"specific impulse must be positive, got {self.specific_impulse_s}")
        if self.initial_propellant_kg <= 0:
            problems.append(f"initial propellant must be positive, got {self.initial_propellant_kg}")
        if self.propellant_mass_kg < 0:
            problems.append(f"propellant mass must not be negative, got {self.propellant_mass_kg}")
        if self.min_propellant_reserve_kg < 0:
            problems.append(f"propellant reserve must not be negative, got {self.min_propellant_reserve_kg}")
        if self.thrust_n < 0:
            problems.append(f"thrust must not be negative, got {self.thrust_n}")

        if problems:
            message = "Invalid propulsion state: " + "; ".join(problems)
            logger.error(message)
            raise InvalidConfigurationError(message)


@dataclass(frozen=True)
class MissionParameters:
    """Fixed mission assumptions behind the annual Δv budget."""

    nominal_lifetime_years: float = 7.0
    station_keeping_delta_v_per_year: float = 15.0  # m/s, LEO
    average_collision_avoidance_delta_v: float = 0.5  # m/s per maneuver
    expected_collision_maneuvers_per_year: float = 3.0
    orbit_decay_compensation_delta_v_per_year: float = 8.0  # m/s at 400 km

    @property
    def annual_delta_v_budget(self) -> float:
        return (
            self.station_keeping_delta_v_per_year
            + self.orbit_decay_compensation_delta_v_per_year
            + self.average_collision_avoidance_delta_v * self.expected_collision_maneuvers_per_year
        )

    @property
    def nominal_lifetime_days(self) -> float:
        return self.nominal_lifetime_years * 365


DEFAULT_PROPULSION = SpacecraftPropulsion(
    dry_mass_kg=850.0,
    propellant_mass_kg=120.0,
    initial_propellant_kg=150.0,
    specific_impulse_s=290.0,  # hydrazine
    thrust_n=22.0,
    min_propellant_reserve_kg=8.0,
)

MISSION_PARAMS = MissionParameters()


@dataclass
class ManeuverPlan:
    """A planned burn.

    Attributes:
        id: Identifier such as ``CAM-1718000000000``.
        type: Kind of maneuver.
        delta_v_m_s: Velocity change in m/s.
        propellant_required_kg: Propellant the burn consumes.
        execution_time: Planned execution time (UTC).
        description: Human-readable summary.
        priority: Priority of the maneuver.
    """

    id: str
    type: ManeuverType
    delta_v_m_s: float
    propellant_required_kg: float
    execution_time: datetime
    description: str
    priority: ManeuverPriority


@dataclass
class MissionLifetimeState:
    remaining_propellant_kg: float
    used_propellant_kg: float
    cumulative_delta_v_m_s: float
    total_delta_v_capacity_m_s: float
    remaining_delta_v_m_s: float
    estimated_lifetime_days: float
    nominal_lifetime_days: float
    lifetime_percentage: float
    propellant_percentage: float
    operational_margin: float  # percentage points
    status: LifetimeStatus


@dataclass
class AlternativeStrategy:
    name: str
    delta_v_m_s: float
    propellant_saved_kg: float
    lifetime_saved_days: float
    tradeoff: str


@dataclass
class ManeuverImpact:
    """Effect of a maneuver on the mission lifetime budget.

    Attributes:
        maneuver: The assessed maneuver.
        lifetime_before: Lifetime state before the burn.
        lifetime_after: Lifetime state after the burn.
        lifetime_reduction_days: Estimated lifetime lost.
        margin_reduction: Operational margin lost, in percentage points.
        recommendation: Execute, defer, optimize or reject.
        alternative_strategies: Cheaper options, for collision avoidance only.
    """

    maneuver: ManeuverPlan
    lifetime_before: MissionLifetimeState
    lifetime_after: MissionLifetimeState
    lifetime_reduction_days: float
    margin_reduction: float
    recommendation: Recommendation
    alternative_strategies: list[AlternativeStrategy] = field(default_factory=list)


@dataclass
class FuelHistoryPoint:
    day: float
    propellant_kg: float
    cumulative_delta_v_m_s: float


def calculate_delta_v(propulsion: SpacecraftPropulsion, propellant_used: float) -> float:
    """Tsiolkovsky rocket equation: Δv = Isp · g₀ · ln(m₀ / m₁).

    Args:
        propulsion: Current propulsion state (m₀ = dry + current propellant).
        propellant_used: Propellant burned in kg.

    Returns:
        Δv in m/s.

    Raises:
        ImpossibleManeuverError: If the final mass would be at or below the
            dry mass.
        InvalidConfigurationError: If propellant_used is negative.
    """
    if propellant_used < 0:
        logger.error("Negative propellant use: %s kg", propellant_used)
        raise InvalidConfigurationError(f"Propellant used must not be negative, got {propellant_used}")
    if propellant_used == 0:
        return 0.0

    m0 = propulsion.wet_mass_kg
    m1 = m0 - propellant_used

    if m1 <= propulsion.dry_mass_kg:
        logger.error(
            "Impossible maneuver: %.3f kg requested, %.3f kg on board",
            propellant_used, propulsion.propellant_mass_kg,
        )
        raise ImpossibleManeuverError(propellant_used, propulsion.propellant_mass_kg)

    return propulsion.exhaust_velocity_m_s * math.log(m0 / m1)


def calculate_propellant_required(propulsion: SpacecraftPropulsion, delta_v: float) -> float:
    """Inverse rocket equation: propellant in kg for a Δv from the current mass."""
    mass_ratio = math.exp(delta_v / propulsion.exhaust_velocity_m_s)
    current_mass = propulsion.wet_mass_kg
    final_mass = current_mass / mass_ratio
    return max(0.0, current_mass - final_mass)


def _delta_v_from_mass(dry_mass: float, propellant_mass: float, isp: float) -> float:
    if propellant_mass <= 0:
        return 0.0
    return isp * G0 * math.log((dry_mass + propellant_mass) / dry_mass)


def calculate_total_delta_v_capacity(propulsion: SpacecraftPropulsion) -> float:
    """Δv available from the propellant above the disposal reserve."""
    usable = propulsion.propellant_mass_kg - propulsion.min_propellant_reserve_kg
    if usable <= 0:
        return 0.0
    # burn down to dry + reserve
    return _delta_v_from_mass(
        propulsion.dry_mass_kg + propulsion.min_propellant_reserve_kg,
        usable,
        propulsion.specific_impulse_s,
    )


def lifetime_status(operational_margin: float) -> LifetimeStatus:
    """Status for an operational margin in percentage points."""
    if operational_margin < 10:
        return LifetimeStatus.CRITICAL
    elif operational_margin < 25:
        return LifetimeStatus.WARNING
    elif operational_margin < 50:
        return LifetimeStatus.CAUTION
    return LifetimeStatus.NOMINAL


def calculate_mission_lifetime_state(
    propulsion: SpacecraftPropulsion,
    cumulative_delta_v: float = 0.0,
    params: MissionParameters = MISSION_PARAMS,
) -> MissionLifetimeState:
    """Remaining lifetime and operational margin for a propulsion state.

    Lifetime is the remaining Δv capacity spread over the annual budget
    (station keeping + decay compensation + expected avoidance maneuvers).
    The operational margin is the tighter of the usable-propellant fraction
    and the lifetime percentage.

    Args:
        propulsion: Current propulsion state.
        cumulative_delta_v: Δv already spent in m/s (reported, not used in
            the budget).
        params: Mission assumptions.

    Returns:
        MissionLifetimeState with status derived from the margin.
    """
    propulsion.validate()

    used = propulsion.initial_propellant_kg - propulsion.propellant_mass_kg
    total_capacity = _delta_v_from_mass(
        propulsion.dry_mass_kg,
        propulsion.initial_propellant_kg - propulsion.min_propellant_reserve_kg,
        propulsion.specific_impulse_s,
    )
    remaining_capacity = calculate_total_delta_v_capacity(propulsion)

    remaining_days = remaining_capacity / params.annual_delta_v_budget * 365
    nominal_days = params.nominal_lifetime_days

    lifetime_pct = min(100.0, remaining_days / nominal_days * 100)
    propellant_pct = propulsion.propellant_mass_kg / propulsion.initial_propellant_kg * 100
    propellant_margin = (
        (propulsion.propellant_mass_kg - propulsion.min_propellant_reserve_kg)
        / propulsion.initial_propellant_kg * 100
    )
    margin = min(propellant_margin, lifetime_pct)

    return MissionLifetimeState(
        remaining_propellant_kg=propulsion.propellant_mass_kg,
        used_propellant_kg=used,
        cumulative_delta_v_m_s=cumulative_delta_v,
        total_delta_v_capacity_m_s=total_capacity,
        remaining_delta_v_m_s=remaining_capacity,
        estimated_lifetime_days=max(0.0, remaining_days),
        nominal_lifetime_days=nominal_days,
        lifetime_percentage=lifetime_pct,
        propellant_percentage=propellant_pct,
        operational_margin=margin,
        status=lifetime_status(margin),
    )


_THREAT_MULTIPLIERS = {
    ThreatLevel.CRITICAL: 2.5,
    ThreatLevel.HIGH: 1.8,
    ThreatLevel.MEDIUM: 1.2,
    ThreatLevel.LOW: 0.6,
}

_ID_PREFIXES = {
    ManeuverType.COLLISION_AVOIDANCE: "CAM",
    ManeuverType.STATION_KEEPING: "SK",
    ManeuverType.ORBIT_RAISE: "OR",
    ManeuverType.DEORBIT: "DO",
    ManeuverType.ATTITUDE_CORRECTION: "AC",
}


def _miss_distance_multiplier(miss_distance_km: float) -> float:
    if miss_distance_km < 0.5:
        return 1.5
    elif miss_distance_km < 1:
        return 1.2
    elif miss_distance_km > 5:
        return 0.7
    return 1.0


def _default_id(maneuver_type: ManeuverType) -> str:
    return f"{_ID_PREFIXES[maneuver_type]}-{int(time.time() * 1000)}"


def create_maneuver(
    propulsion: SpacecraftPropulsion,
    maneuver_type: ManeuverType | str,
    delta_v: float,
    priority: ManeuverPriority | str = ManeuverPriority.MEDIUM,
    description: str | None = None,
    execution_time: datetime | None = None,
    maneuver_id: str | None = None,
) -> ManeuverPlan:
    """Plan a maneuver of any type for a given Δv.

    Δv is rounded to cm/s and propellant to grams. Execution time defaults
    to one hour from now (UTC).
    """
    maneuver_type = ManeuverType(maneuver_type)
    priority = ManeuverPriority(priority)
    delta_v = round_half_up(delta_v, 2)
    propellant = calculate_propellant_required(propulsion, delta_v)

    if execution_time is None:
        execution_time = datetime.now(timezone.utc) + timedelta(hours=1)

    plan = ManeuverPlan(
        id=maneuver_id or _default_id(maneuver_type),
        type=maneuver_type,
        delta_v_m_s=delta_v,
        propellant_required_kg=round_half_up(propellant, 3),
        execution_time=execution_time,
        description=description or f"{maneuver_type.value.replace('_', ' ').capitalize()} burn of {delta_v:.2f} m/s",
        priority=priority,
    )
    logger.debug("Planned %s: dv=%.2f m/s, propellant=%.3f kg", plan.id, plan.delta_v_m_s, plan.propellant_required_kg)
    return plan


def create_collision_avoidance_maneuver(
    propulsion: SpacecraftPropulsion,
    threat_level: ThreatLevel | str,
    miss_distance_km: float,
    execution_time: datetime | None = None,
    maneuver_id: str | None = None,
) -> ManeuverPlan:
    """Plan an avoidance burn sized by threat level and miss distance.

    The average avoidance Δv is scaled by the threat multiplier (critical
    2.5, high 1.8, medium 1.2, low 0.6) and then by the miss-distance
    bracket (<0.5 km 1.5, <1 km 1.2, >5 km 0.7). Priority mirrors the
    threat level.
    """
    threat_level = ThreatLevel(threat_level)
    delta_v = (
        MISSION_PARAMS.average_collision_avoidance_delta_v
        * _THREAT_MULTIPLIERS[threat_level]
        * _miss_distance_multiplier(miss_distance_km)
    )

    return create_maneuver(
        propulsion,
        ManeuverType.COLLISION_AVOIDANCE,
        delta_v,
        priority=threat_level,
        description=(
            f"Collision avoidance maneuver for {threat_level.value} threat "
            f"at {miss_distance_km:.2f}km miss distance"
        ),
        execution_time=execution_time,
        maneuver_id=maneuver_id,
    )


def _recommend(
    maneuver: ManeuverPlan,
    margin_reduction: float,
    after: MissionLifetimeState,
) -> Recommendation:
    if maneuver.priority in (ManeuverPriority.CRITICAL, ManeuverPriority.HIGH):
        return Recommendation.EXECUTE
    elif margin_reduction > 10 and maneuver.priority is ManeuverPriority.LOW:
        return Recommendation.REJECT
    elif margin_reduction > 5:
        return Recommendation.OPTIMIZE
    elif after.status is LifetimeStatus.CRITICAL:
        return Recommendation.DEFER
    return Recommendation.EXECUTE


def generate_alternative_strategies(
    maneuver: ManeuverPlan,
    lifetime_impact_days: float,
) -> list[AlternativeStrategy]:
    """Cheaper alternatives to a collision avoidance burn."""
    if maneuver.type is not ManeuverType.COLLISION_AVOIDANCE:
        return []

    strategies = [
        AlternativeStrategy(
            name="In-track timing adjustment",
            delta_v_m_s=maneuver.delta_v_m_s * 0.6,
            propellant_saved_kg=maneuver.propellant_required_kg * 0.4,
            lifetime_saved_days=lifetime_impact_days * 0.4,
            tradeoff="Requires earlier execution (24h+), slight increase in residual collision probability",
        ),
        AlternativeStrategy(
            name="Cross-track offset",
            delta_v_m_s=maneuver.delta_v_m_s * 0.7,
            propellant_saved_kg=maneuver.propellant_required_kg * 0.3,
            lifetime_saved_days=lifetime_impact_days * 0.3,
            tradeoff="Changes orbital plane slightly, may require future correction",
        ),
    ]

    if maneuver.priority is not ManeuverPriority.CRITICAL:
        strategies.append(AlternativeStrategy(
            name="Enhanced monitoring only",
            delta_v_m_s=0.0,
            propellant_saved_kg=maneuver.propellant_required_kg,
            lifetime_saved_days=lifetime_impact_days,
            tradeoff="Accepts calculated collision risk, continuous tracking required",
        ))

    return strategies


def assess_maneuver_impact(
    propulsion: SpacecraftPropulsion,
    maneuver: ManeuverPlan,
    cumulative_delta_v: float = 0.0,
) -> ManeuverImpact:
    """Compare mission lifetime before and after a maneuver.

    Recommendation, evaluated in order: critical/high priority executes;
    a low-priority burn costing more than 10 margin points is rejected;
    more than 5 points asks for optimisation; a critical post-burn status
    defers; otherwise execute.

    Raises:
        ImpossibleManeuverError: If the maneuver needs more propellant than
            is on board.
    """
    if maneuver.propellant_required_kg > propulsion.propellant_mass_kg:
        logger.error("Maneuver %s needs %.3f kg, %.3f kg on board",
                     maneuver.id, maneuver.propellant_required_kg, propulsion.propellant_mass_kg)
        raise ImpossibleManeuverError(maneuver.propellant_required_kg, propulsion.propellant_mass_kg)

    before = calculate_mission_lifetime_state(propulsion, cumulative_delta_v)
    after = calculate_mission_lifetime_state(
        propulsion.with_propellant(propulsion.propellant_mass_kg - maneuver.propellant_required_kg),
        cumulative_delta_v + maneuver.delta_v_m_s,
    )

    lifetime_reduction = before.estimated_lifetime_days - after.estimated_lifetime_days
    margin_reduction = before.operational_margin - after.operational_margin
    recommendation = _recommend(maneuver, margin_reduction, after)

    logger.debug(
        "Maneuver %s: -%.1f days, -%.2f margin points -> %s",
        maneuver.id, lifetime_reduction, margin_reduction, recommendation.value,
    )
    return ManeuverImpact(
        maneuver=maneuver,
        lifetime_before=before,
        lifetime_after=after,
        lifetime_reduction_days=lifetime_reduction,
        margin_reduction=margin_reduction,
        recommendation=recommendation,
        alternative_strategies=generate_alternative_strategies(maneuver, lifetime_reduction),
    )


def explore_delta_v(
    propulsion: SpacecraftPropulsion,
    cumulative_delta_v: float,
    extra_delta_v: float,
) -> MissionLifetimeState:
    """What-if lifetime state after spending extra Δv.

    Propellant is drawn in proportion to the share of the remaining Δv
    capacity the extra Δv represents.

    Raises:
        ImpossibleManeuverError: If the extra Δv exceeds what the propellant
            on board can deliver.
    """
    current = calculate_mission_lifetime_state(propulsion, cumulative_delta_v)
    if extra_delta_v == 0:
        return current

    if current.remaining_delta_v_m_s <= 0:
        raise ImpossibleManeuverError(propulsion.propellant_mass_kg, propulsion.propellant_mass_kg)

    burned = extra_delta_v * propulsion.propellant_mass_kg / current.remaining_delta_v_m_s
    if burned > propulsion.propellant_mass_kg:
        raise ImpossibleManeuverError(burned, propulsion.propellant_mass_kg)

    return calculate_mission_lifetime_state(
        propulsion.with_propellant(propulsion.propellant_mass_kg - burned),
        cumulative_delta_v + extra_delta_v,
    )


def synthesize_fuel_history(
    propulsion: SpacecraftPropulsion,
    cumulative_delta_v: float,
    points: int = 12,
    params: MissionParameters = MISSION_PARAMS,
) -> list[FuelHistoryPoint]:
    """Evenly spaced propellant history from beginning of life to now.

    Elapsed mission time is estimated as the cumulative Δv over the annual
    budget; propellant and Δv are interpolated linearly between the
    beginning-of-life and current states.
    """
    if points < 2:
        raise InvalidConfigurationError(f"Fuel history needs at least 2 points, got {points}")

    elapsed_days = cumulative_delta_v / params.annual_delta_v_budget * 365
    burned = propulsion.initial_propellant_kg - propulsion.propellant_mass_kg

    history = []
    for k in range(points):
        frac = k / (points - 1)
        history.append(FuelHistoryPoint(
            day=elapsed_days * frac,
            propellant_kg=propulsion.initial_propellant_kg - burned * frac,
            cumulative_delta_v_m_s=cumulative_delta_v * frac,
        ))
    return history


def calculate_burn_duration(propulsion: SpacecraftPropulsion, delta_v: float) -> float:
    """Burn time in seconds at nominal thrust for a Δv."""
    if propulsion.thrust_n <= 0:
        logger.error("Burn duration requested with thrust %s N", propulsion.thrust_n)
        raise InvalidConfigurationError(f"Thrust must be positive, got {propulsion.thrust_n}")
    mass_flow_rate = propulsion.thrust_n / propulsion.exhaust_velocity_m_s
    return calculate_propellant_required(propulsion, delta_v) / mass_flow_rate


def format_propellant(kg: float) -> str:
    if kg < 1:
        return f"{kg * 1000:.0f}g"
    return f"{kg:.2f}kg"


def format_delta_v(m_s: float) -> str:
    if m_s < 1:
        return f"{m_s * 100:.1f}cm/s"
    return f"{m_s:.2f}m/s"


def format_lifetime(days: float) -> str:
    if days < 30:
        return f"{round_half_up(days):.0f} days"
    if days < 365:
        return f"{days / 30:.1f} months"
    return f"{days / 365:.1f} years"
