"""HTTP endpoint for thermal risk prediction.

Wraps :func:`orbrisk.core.thermal.run_thermal_simulation` behind
``GET``/``POST /thermal-predict`` with open CORS for browser front ends.

Run locally with::

    python -m orbrisk.api.server
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from orbrisk import __version__
from orbrisk.core.thermal import (
    DEFAULT_SATELLITE_CONFIG,
    SATELLITE_PRESETS,
    OrbitalState,
    ThermalPrediction,
    format_duration,
    kelvin_to_celsius,
    run_thermal_simulation,
)
from orbrisk.utils.rounding import round_half_up

logger = logging.getLogger(__name__)


class ThermalPredictRequest(BaseModel):
    """Thermal prediction parameters, shared by query string and JSON body."""

    altitude: float = Field(400.0, description="Orbit altitude (km)")
    inclination: float = Field(0.9, description="Inclination (radians)")
    betaAngle: float = Field(0.3, description="Beta angle (radians)")
    duration: int = Field(10800, description="Simulated time (seconds)")
    type: str = Field("default", description="Spacecraft preset: default, cubesat or iss")


app = FastAPI(
    title="orbrisk thermal prediction",
    description="Thermal risk prediction for spacecraft in low Earth orbit",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)


def classify_risk_score(score: float) -> str:
    """Coarse risk level for the endpoint: low, moderate, high or critical."""
    if score < 25:
        return "low"
    elif score < 50:
        return "moderate"
    elif score < 75:
        return "high"
    return "critical"


def _summary(prediction: ThermalPrediction, risk_level: str) -> str:
    peak_c = int(round_half_up(kelvin_to_celsius(prediction.peak_temperature_k)))
    if prediction.time_to_overheat_s is not None:
        outlook = f"WARNING: Overheat predicted in {format_duration(prediction.time_to_overheat_s)}."
    else:
        outlook = "No thermal limit breaches predicted."
    return (
        f"Thermal analysis complete. Risk level: {risk_level.upper()}. "
        f"Peak temperature: {peak_c}°C. {outlook}"
    )


def predict(params: ThermalPredictRequest, start_time: datetime) -> dict[str, Any]:
    """Run the simulation for a request and build the ``data`` payload."""
    config = SATELLITE_PRESETS.get(params.type.lower(), DEFAULT_SATELLITE_CONFIG)
    orbital_state = OrbitalState(
        altitude_km=params.altitude,
        inclination_rad=params.inclination,
        beta_angle_rad=params.betaAngle,
    )

    logger.info(
        "Running thermal prediction: type=%s altitude=%.1f km duration=%d s",
        params.type, params.altitude, params.duration,
    )
    prediction = run_thermal_simulation(config, orbital_state, start_time, params.duration)
    risk_level = classify_risk_score(prediction.risk_score)
    overheat = prediction.time_to_overheat_s

    return {
        "peakTemperature": round_half_up(prediction.peak_temperature_k, 2),
        "peakTemperatureCelsius": round_half_up(kelvin_to_celsius(prediction.peak_temperature_k), 2),
        "minTemperature": round_half_up(prediction.min_temperature_k, 2),
        "minTemperatureCelsius": round_half_up(kelvin_to_celsius(prediction.min_temperature_k), 2),
        "timeToOverheat": overheat,
        "timeToOverheatFormatted": format_duration(overheat) if overheat is not None else None,
        "riskScore": prediction.risk_score,
        "riskLevel": risk_level,
        "mitigations": [
            {
                "type": m.type.value,
                "description": m.description,
                "impact": m.impact_k,
                "priority": m.priority.value,
            }
            for m in prediction.mitigations
        ],
        "summary": _summary(prediction, risk_level),
    }


def _params_from_query(request: Request) -> ThermalPredictRequest:
    query = request.query_params
    return ThermalPredictRequest(
        altitude=float(query.get("altitude", "400")),
        inclination=float(query.get("inclination", "0.9")),
        betaAngle=float(query.get("betaAngle", "0.3")),
        duration=int(float(query.get("duration", "10800"))),
        type=query.get("type", "default"),
    )


async def _handle(request: Request) -> JSONResponse:
    try:
        if request.method == "POST":
            params = ThermalPredictRequest.model_validate(await request.json())
        else:
            params = _params_from_query(request)

        now = datetime.now(timezone.utc)
        data = predict(params, now)
    except Exception as exc:
        logger.exception("Thermal prediction error")
        return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})

    return JSONResponse(content={
        "success": True,
        "data": data,
        "parameters": {
            "altitude": params.altitude,
            "inclination": params.inclination,
            "betaAngle": params.betaAngle,
            "duration": params.duration,
            "satelliteType": params.type,
        },
        "timestamp": now.isoformat(),
    })


@app.get("/thermal-predict")
async def thermal_predict_get(request: Request) -> JSONResponse:
    return await _handle(request)


@app.post("/thermal-predict")
async def thermal_predict_post(request: Request) -> JSONResponse:
    return await _handle(request)


def main() -> None:
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
