from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any, Protocol

import requests

from ..models.mapping import ColumnMapping
from ..models.row_data import Row, cell_text

"""External column-inference boundary.

The inference service guesses which columns hold coordinates and writes a
short description of the dataset. Both answers are advisory: every failure
(no client, network error, timeout, malformed reply) is caught here and turned
into None or a static placeholder so point resolution never waits on or
crashes because of it.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "COLUMN_SAMPLE_ROWS",
    "HttpInferenceClient",
    "INSIGHT_SAMPLE_ROWS",
    "InferenceClient",
    "InferenceError",
    "NO_CLIENT_INSIGHT",
    "client_from_config",
    "FAILED_INSIGHT",
    "identify_columns",
    "sheet_insights",
]

COLUMN_SAMPLE_ROWS = 5
INSIGHT_SAMPLE_ROWS = 10

NO_CLIENT_INSIGHT = "Visualize your spatial data using the map tools below."
FAILED_INSIGHT = "Mapping complete. Explore the locations on the right."

COLUMN_INSTRUCTIONS = (
    "Identify the column(s) representing geographic coordinates.\n"
    "1. If a single column contains BOTH values (e.g. \"40.7, -74.0\"), return that "
    "column name for BOTH latColumn and lngColumn.\n"
    "2. Coordinates might use a comma as a decimal separator (European style: 48,85) "
    "or a column separator.\n"
    "3. Look for headers like 'lat', 'long', 'coords', 'location', 'gps', 'y', 'x'.\n"
    "4. Return valid JSON only: {\"latColumn\": ..., \"lngColumn\": ...}."
)
INSIGHT_INSTRUCTIONS = (
    "The user uploaded geographic data. "
    "Summarize what these locations represent in 1-2 short sentences."
)


class InferenceError(Exception):
    """Raised by clients when the service answers with an unusable reply."""


class InferenceClient(Protocol):
    def identify_columns(self, headers: Sequence[str], sample_rows: Sequence[Row]) -> Any: ...

    def summarize(self, sample_rows: Sequence[Row]) -> str: ...


def _sample(rows: Sequence[Row], limit: int) -> list[dict[str, str]]:
    return [{k: cell_text(v) for k, v in row.items()} for row in rows[:limit]]


class HttpInferenceClient:
    """JSON-over-HTTP inference client.

    POSTs ``{"instructions", "headers", "sample_rows"}`` to ``<endpoint>/columns``
    and ``{"instructions", "sample_rows"}`` to ``<endpoint>/insights``, bearer-authenticated.
    """

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        *,
        timeout: float = 15.0,
        session: requests.Session | None = None,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def _post(self, path: str, payload: dict[str, Any]) -> Any:
        try:
            resp = self.session.post(
                f"{self.endpoint}/{path}",
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            raise InferenceError(f"{path}: {e}") from e
        except json.JSONDecodeError as e:
            raise InferenceError(f"{path}: reply is not JSON") from e

    def identify_columns(self, headers: Sequence[str], sample_rows: Sequence[Row]) -> Any:
        return self._post(
            "columns",
            {"instructions": COLUMN_INSTRUCTIONS, "headers": list(headers), "sample_rows": list(sample_rows)},
        )

    def summarize(self, sample_rows: Sequence[Row]) -> str:
        reply = self._post("insights", {"instructions": INSIGHT_INSTRUCTIONS, "sample_rows": list(sample_rows)})
        text = reply.get("text") if isinstance(reply, dict) else None
        if not isinstance(text, str) or not text.strip():
            raise InferenceError("insights: reply has no text")
        return text.strip()


def identify_columns(
    headers: Sequence[str], rows: Sequence[Row], client: InferenceClient | None
) -> ColumnMapping | None:
    """Ask the inference service for a column mapping hint.

    The returned hint is unvalidated; pass it through ``resolve_mapping`` which
    checks both names against the real headers.
    """
    if client is None:
        logger.debug("no inference client configured, using heuristic mapping")
        return None
    try:
        reply = client.identify_columns(headers, _sample(rows, COLUMN_SAMPLE_ROWS))
    except Exception as e:  # any client failure degrades to the heuristic
        logger.warning(f"column inference failed, falling back to heuristic: {e}")
        return None
    hint = ColumnMapping.from_dict(reply)
    if hint is None:
        logger.warning("column inference returned an unusable reply, falling back to heuristic")
    return hint


def sheet_insights(rows: Sequence[Row], client: InferenceClient | None) -> str:
    if client is None:
        return NO_CLIENT_INSIGHT
    try:
        return client.summarize(_sample(rows, INSIGHT_SAMPLE_ROWS))
    except Exception as e:  # advisory text only
        logger.debug(f"insight request failed: {e}")
        return FAILED_INSIGHT


def client_from_config(endpoint: str | None, api_key: str | None, timeout: float = 15.0) -> HttpInferenceClient | None:
    """HTTP client when both endpoint and key are set, else None (heuristic only)."""
    if not endpoint or not api_key:
        return None
    return HttpInferenceClient(endpoint, api_key, timeout=timeout)
