"""Exceptions raised by the risk engines."""

from __future__ import annotations


class OrbRiskError(Exception):
    """Base class for all orbrisk errors."""


class InvalidConfigurationError(OrbRiskError, ValueError):
    """A spacecraft or simulation configuration is not physical.

    Raised before any arithmetic that would otherwise divide by zero or
    produce a negative thermal mass.
    """


class ImpossibleManeuverError(OrbRiskError, ValueError):
    """A maneuver would burn the spacecraft below its dry mass.

    Attributes:
        propellant_used_kg: Propellant the caller asked to burn.
        available_kg: Propellant actually on board.
    """

    def __init__(self, propellant_used_kg: float, available_kg: float) -> None:
        self.propellant_used_kg = propellant_used_kg
        self.available_kg = available_kg
        super().__init__(
            f"Propellant exceeds available mass: requested {propellant_used_kg:.3f} kg, "
            f"{available_kg:.3f} kg on board"
        )
