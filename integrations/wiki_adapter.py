import logging
from typing import Any, List

import requests

from flood_config import HISTORY_RESULT_LIMIT, HTTP_TIMEOUT_S, USER_AGENT, WIKIPEDIA_API_URL
from flood_engine.models import HistoricalEvent, PlaceIdentity

logger = logging.getLogger(__name__)

_HEADERS = {"User-Agent": USER_AGENT, "Accept": "application/json"}


def history_query(place: PlaceIdentity) -> str:
    return f"{place.city} {place.region}".strip()


def parse_search_results(data: Any) -> List[HistoricalEvent]:
    """Snippets keep Wikipedia's highlight markup; callers render them as-is."""
    if not isinstance(data, dict):
        return []
    hits = (data.get("query") or {}).get("search") or []
    return [
        HistoricalEvent(str(hit.get("title", "")), str(hit.get("snippet", "")))
        for hit in hits
        if isinstance(hit, dict)
    ]


def fetch_historical_context(query: str) -> List[HistoricalEvent]:
    """
    Past flood coverage for a place via Wikipedia full-text search.
    Blocking; meant to run off the event loop. Failure -> [].
    """
    params = {
        "action": "query",
        "format": "json",
        "list": "search",
        "srsearch": f"Flood {query}",
        "srlimit": HISTORY_RESULT_LIMIT,
    }
    try:
        resp = requests.get(WIKIPEDIA_API_URL, params=params, headers=_HEADERS, timeout=HTTP_TIMEOUT_S)
        resp.raise_for_status()
        return parse_search_results(resp.json())
    except Exception as e:
        logger.warning(f"Wiki fetch failed for '{query}': {e}")
        return []
