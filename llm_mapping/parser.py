"""Parsing layer for raw mapping-oracle output.

Turns free-form model text into a list of untyped JSON items. Parsing
never raises: failures are reported in the result so the caller can
route the rows to the fallback mapper.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, List, Optional

_JSON_FENCE = re.compile(r"```json\s*(.*?)```", re.DOTALL | re.IGNORECASE)
_ANY_FENCE = re.compile(r"```[a-zA-Z0-9_-]*\s*(.*?)```", re.DOTALL)


class MappingResponseError(Exception):
    """Describes why oracle output could not be used.

    Attributes:
        stage: Which parsing step failed ("empty", "json_parse" or "shape").
        errors: List of human-readable error descriptions.
        raw_response: The original string that failed parsing.
    """

    def __init__(
        self,
        stage: str,
        errors: List[str],
        raw_response: str,
    ) -> None:
        self.stage = stage
        self.errors = errors
        self.raw_response = raw_response
        message = (
            f"Mapping response rejected at stage '{stage}': "
            + "; ".join(errors)
        )
        super().__init__(message)


@dataclass(frozen=True)
class MappingParseResult:
    """Outcome of parsing one oracle response."""

    records: Optional[List[Any]]
    error: Optional[MappingResponseError]
    raw_response: str

    @property
    def ok(self) -> bool:
        return self.records is not None


def _extract_candidate(text: str) -> str:
    """Pick the JSON payload out of the response.

    A ```json fence wins over any other fence; without fences the whole
    text is used.
    """
    match = _JSON_FENCE.search(text)
    if match:
        return match.group(1).strip()
    match = _ANY_FENCE.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def _bracket_slice(text: str) -> Optional[str]:
    start = text.find("[")
    end = text.rfind("]")
    if start < 0 or end <= start:
        return None
    return text[start : end + 1]


def parse_mapping_response(raw_response: Optional[str]) -> MappingParseResult:
    """Parse a raw oracle response into a list of JSON items.

    Steps:
        1. Extract the fenced block, if any.
        2. ``json.loads`` the candidate; on failure retry on the slice
           between the first ``[`` and the last ``]``. Nesting too deep
           to decode is a parse failure like any syntax error.
        3. Require the decoded value to be a JSON array.

    Args:
        raw_response: Raw text returned by the model.

    Returns:
        A MappingParseResult with either ``records`` or ``error`` set.
    """
    text = raw_response or ""
    if not text.strip():
        return MappingParseResult(
            records=None,
            error=MappingResponseError("empty", ["response is empty"], text),
            raw_response=text,
        )

    candidate = _extract_candidate(text)
    try:
        parsed = json.loads(candidate)
    except (ValueError, RecursionError) as exc:
        sliced = _bracket_slice(candidate)
        if sliced is None:
            return MappingParseResult(
                records=None,
                error=MappingResponseError("json_parse", [str(exc)], text),
                raw_response=text,
            )
        try:
            parsed = json.loads(sliced)
        except (ValueError, RecursionError) as slice_exc:
            return MappingParseResult(
                records=None,
                error=MappingResponseError("json_parse", [str(exc), str(slice_exc)], text),
                raw_response=text,
            )

    if not isinstance(parsed, list):
        return MappingParseResult(
            records=None,
            error=MappingResponseError(
                "shape",
                [f"expected a JSON array, got {type(parsed).__name__}"],
                text,
            ),
            raw_response=text,
        )
    return MappingParseResult(records=parsed, error=None, raw_response=text)
