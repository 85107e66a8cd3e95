"""
Analytics document loader.

The sync job exports a single analytics.json; this module reads it from disk
or over HTTP and validates it. Any failure is logged and reported as "no
data" so callers can show the banner instead of an error.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import httpx
from pydantic import ValidationError

from ..config import get_settings
from ..schemas.analytics import AnalyticsDocument

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No data available. Run the sync script first."


def is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _read_remote(source: str, timeout: float, transport: Optional[httpx.BaseTransport] = None) -> str:
    with httpx.Client(timeout=timeout, transport=transport) as client:
        response = client.get(source)
        response.raise_for_status()
        return response.text


def load_document(
    source: str,
    timeout: float = 10.0,
    transport: Optional[httpx.BaseTransport] = None,
) -> Optional[AnalyticsDocument]:
    """Load and validate the analytics document.

    Returns None when the document is missing, unreachable or malformed.
    """
    try:
        if is_remote(source):
            raw = _read_remote(source, timeout, transport)
        else:
            raw = Path(source).read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.warning(f"Analytics document not found at {source}")
        return None
    except (OSError, httpx.HTTPError) as e:
        logger.error(f"Error loading analytics document from {source}: {e}")
        return None

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error(f"Analytics document at {source} is not valid JSON: {e}")
        return None

    if not isinstance(payload, dict):
        logger.error(f"Analytics document at {source} is not a JSON object")
        return None

    try:
        return AnalyticsDocument.model_validate(payload)
    except ValidationError as e:
        logger.error(f"Analytics document at {source} failed validation: {e.error_count()} errors")
        return None


def get_document() -> Optional[AnalyticsDocument]:
    """Dependency that loads the configured analytics document."""
    settings = get_settings()
    return load_document(settings.analytics_source, settings.analytics_timeout)
