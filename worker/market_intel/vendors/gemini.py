"""Client utilities for the Gemini generateContent API with Maps grounding."""

import logging
from typing import Any, Dict, Iterable, List, Optional

import requests

from market_intel.core.models import GroundingCitation, TargetVenue

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

TABLE_HEADER = "| Venue Name | Rating | Review Count | Place ID | Address |"


class GeminiError(RuntimeError):
    """Raised when the Gemini API returns a non-successful response."""


def build_prompt(targets: Iterable[TargetVenue], location: str) -> str:
    target_lines = "\n".join(f"- {t.name} (Place ID: {t.place_id})" for t in targets)
    return (
        f"Perform a live lookup of the following CASINO entities in {location}.\n\n"
        f"TARGET VENUES:\n{target_lines}\n\n"
        "RULES:\n"
        "- Report data for ALL listed target venues.\n"
        "- Report the Casino listing's rating, not the Hotel listing's.\n"
        "- If a venue has multiple entries, pick the one matching the Place ID.\n\n"
        f"Format the response as a Markdown table:\n{TABLE_HEADER}\n"
    )


def generate_grounded(
    prompt: str,
    api_key: str,
    model: str,
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    timeout: float = 60,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "tools": [{"googleMaps": {}}, {"googleSearch": {}}],
        "generationConfig": {"temperature": 0.1},
    }
    if lat is not None and lng is not None:
        body["toolConfig"] = {"retrievalConfig": {"latLng": {"latitude": lat, "longitude": lng}}}

    response = _SESSION.post(
        f"{_BASE_URL}/{model}:generateContent",
        params={"key": api_key},
        json=body,
        timeout=timeout,
    )
    payload = _json_or_empty(response)
    if response.status_code >= 400 or "error" in payload:
        error = payload.get("error") or {}
        message = error.get("message") if isinstance(error, dict) else str(error)
        logger.error("generateContent failed: status=%s, error_message=%s", response.status_code, message)
        raise GeminiError(message or f"HTTP {response.status_code}")
    return payload


def _json_or_empty(response) -> Dict[str, Any]:
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def _first_candidate(payload: Dict[str, Any]) -> Dict[str, Any]:
    candidates = payload.get("candidates") or []
    return candidates[0] if candidates else {}


def extract_text(payload: Dict[str, Any]) -> str:
    parts = (_first_candidate(payload).get("content") or {}).get("parts") or []
    return "".join(part.get("text", "") for part in parts if isinstance(part, dict))


def _strip_places_prefix(place_id: Optional[str]) -> Optional[str]:
    if place_id and place_id.startswith("places/"):
        return place_id[len("places/"):]
    return place_id or None


def extract_citations(payload: Dict[str, Any]) -> List[GroundingCitation]:
    metadata = _first_candidate(payload).get("groundingMetadata") or {}
    citations: List[GroundingCitation] = []
    for chunk in metadata.get("groundingChunks") or []:
        maps = chunk.get("maps") if isinstance(chunk, dict) else None
        if not maps:
            continue
        citations.append(
            GroundingCitation(
                title=maps.get("title"),
                place_id=_strip_places_prefix(maps.get("placeId")),
                uri=maps.get("uri"),
            )
        )
    return citations
