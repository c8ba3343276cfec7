# trip_estimator/llm.py
import os
import json
import logging
from typing import Any, Dict, Optional, Tuple

from dotenv import load_dotenv
from openai import OpenAI, OpenAIError
from pydantic import ValidationError

from trip_estimator.schemas import Itinerary, Plan, PlanOutline

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("TRIP_ESTIMATOR_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

# Load .env file if present
load_dotenv()

DEFAULT_MODEL = os.getenv("TRIP_ESTIMATOR_ITINERARY_MODEL") or "gpt-4o-mini"

api_key = os.getenv("OPENAI_API_KEY")
if api_key:
    _client: Optional[OpenAI] = OpenAI(api_key=api_key)
else:  # pragma: no cover - exercised indirectly in tests without API key
    _client = None
    logger.warning("OPENAI_API_KEY not set; itinerary narratives are unavailable")


class ItineraryError(RuntimeError):
    """The narrative service could not produce a usable itinerary."""


SYSTEM_PROMPT = """You are a concise travel planner. Return ONLY valid JSON matching:
{
  "days": [
    {
      "date": "YYYY-MM-DD",
      "city": "string",
      "area": "string",
      "morning": "5-18 words",
      "afternoon": "5-18 words",
      "evening": "5-18 words",
      "transit": "simple tip",
      "food": {
        "breakfast": "local spot",
        "lunch": "local spot",
        "dinner": "local spot"
      }
    }
  ]
}
No extra keys. Keep phrasing practical and affordable.
"""

USER_TEMPLATE = """Window: {depart} → {ret}
Route: {route}
Nights per city: {nights}
"""

CITY_TEMPLATE = """Plan a single relaxed day in {city}.
Use today's date for "date" and "{city}" for "city".
"""


def summarise_plan(plan: Plan | PlanOutline) -> Dict[str, str]:
    """Condensed view of a plan: date window, route and nights per city."""
    return {
        "depart": plan.chosen.depart,
        "ret": plan.chosen.return_date,
        "route": " → ".join(plan.route),
        "nights": ", ".join(f"{stay.city}:{stay.nights}" for stay in plan.stays),
    }


def build_itinerary_prompt(plan: Plan | PlanOutline) -> Tuple[str, str]:
    return SYSTEM_PROMPT, USER_TEMPLATE.format(**summarise_plan(plan)).strip()


def _complete(system: str, user: str, model: str) -> Dict[str, Any]:
    if _client is None:
        logger.info("Skipping itinerary call (missing client or API key)")
        raise ItineraryError("Missing OPENAI_API_KEY")

    logger.info("Invoking LLM model %s for itinerary narrative", model)
    try:
        resp = _client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            temperature=0.7,
            response_format={"type": "json_object"},
        )
    except OpenAIError as exc:
        logger.exception("Itinerary call failed: %s", exc)
        raise ItineraryError(str(exc)) from exc

    try:
        raw = resp.choices[0].message.content or "{}"
    except (AttributeError, IndexError, TypeError) as exc:
        logger.warning("Itinerary response carried no message content")
        raise ItineraryError("Bad AI JSON (no days)") from exc
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.warning("Itinerary response was not valid JSON")
        raise ItineraryError("Invalid JSON from model") from exc
    if not isinstance(payload, dict) or not isinstance(payload.get("days"), list):
        raise ItineraryError("Bad AI JSON (no days)")
    return payload


def _validate(payload: Dict[str, Any]) -> Itinerary:
    try:
        itinerary = Itinerary.model_validate(payload)
    except ValidationError as exc:
        logger.warning("Itinerary JSON did not match the expected day shape")
        raise ItineraryError("Itinerary JSON did not match the expected day shape") from exc
    logger.info("Itinerary parsed with %d day(s)", len(itinerary.days))
    return itinerary


def request_itinerary(plan: Plan | PlanOutline, *, model: Optional[str] = None) -> Itinerary:
    """Ask the hosted model for a day-by-day narrative of ``plan``."""
    system, user = build_itinerary_prompt(plan)
    return _validate(_complete(system, user, model or DEFAULT_MODEL))


def request_city_itinerary(city: str, *, model: Optional[str] = None) -> Itinerary:
    """Single-city request used to check the narrative service by hand."""
    return _validate(_complete(SYSTEM_PROMPT, CITY_TEMPLATE.format(city=city).strip(), model or DEFAULT_MODEL))
