from __future__ import annotations

import os
from typing import Any, Dict, List

from fastapi import Body, Depends, FastAPI, HTTPException, Query
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from trip_estimator.dates import pick_best_dates
from trip_estimator.estimator import TripEstimator
from trip_estimator.llm import ItineraryError, request_city_itinerary, request_itinerary
from trip_estimator.matching import resolve
from trip_estimator.reference import DEFAULT_REFERENCE
from trip_estimator.schemas import DestinationSuggestions, EstimateRequest, ItineraryRequest

app = FastAPI(title="Trip Estimator API")

# Allow local development UIs to reach the API without wrestling with browser
# CORS restrictions. Operators can scope this via TRIP_ESTIMATOR_ALLOWED_ORIGINS.
raw_origins = os.getenv("TRIP_ESTIMATOR_ALLOWED_ORIGINS") or "*"
allowed_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
if not allowed_origins:
    allowed_origins = ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_estimator() -> TripEstimator:
    return TripEstimator(reference=DEFAULT_REFERENCE)


def _validate_request(payload: Dict[str, Any]) -> EstimateRequest:
    try:
        return EstimateRequest.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False)) from exc


@app.get("/healthz")
def healthz() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/api/estimate")
def api_estimate(
    payload: Dict[str, Any] = Body(...),
    estimator: TripEstimator = Depends(get_estimator),
) -> Dict[str, Any]:
    """Primary endpoint consumed by the planner form."""
    req = _validate_request(payload)
    plan = estimator.estimate(req)
    return plan.model_dump(mode="json", by_alias=True)


@app.get("/api/destinations")
def api_destinations(
    q: str = Query(""),
    exclude: List[str] = Query([]),
) -> Dict[str, Any]:
    suggestions = resolve(q, DEFAULT_REFERENCE.destinations, exclude)
    return DestinationSuggestions(query=q, suggestions=suggestions).model_dump()


@app.get("/api/dates")
def api_dates(
    earliest: str = Query(""),
    latest: str = Query(""),
    days: int = Query(0),
) -> Dict[str, str]:
    return pick_best_dates(earliest, latest, days).model_dump(by_alias=True)


@app.post("/api/itinerary")
async def api_itinerary(payload: Dict[str, Any] = Body(...)) -> Any:
    """Forward a condensed plan to the narrative service."""
    try:
        body = ItineraryRequest.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False)) from exc

    try:
        itinerary = await run_in_threadpool(request_itinerary, body.plan)
    except ItineraryError as exc:
        return JSONResponse({"error": str(exc)}, status_code=502)
    return itinerary.model_dump()


@app.get("/api/itinerary")
async def api_city_itinerary(city: str = Query("")) -> Any:
    """Quick browser check: /api/itinerary?city=Paris"""
    if not city.strip():
        return JSONResponse({"error": "Missing ?city="}, status_code=400)
    try:
        itinerary = await run_in_threadpool(request_city_itinerary, city.strip())
    except ItineraryError as exc:
        return JSONResponse({"error": str(exc)}, status_code=502)
    return itinerary.model_dump()
