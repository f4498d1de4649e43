"""
History Request Parameters

Best-effort normalisation of the history query string. Invalid input
narrows the result or falls back to a default; it never raises. Each
ignored input is counted in `discarded`.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Optional, Tuple

logger = logging.getLogger(__name__)

INTEGER_PATTERN = re.compile(r"\s*[+-]?\d+\s*")

# Ids and offsets are bound as signed 64-bit integers; longer digit strings
# are refused before int() sees them
MAX_INTEGER_DIGITS = 20
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


@dataclass(frozen=True)
class HistoryParams:
    itemtype: str
    items_id: int
    limit: Optional[int]  # None means "use the caller's default page size"
    offset: int
    sort: str
    order: str
    filters: Any
    discarded: int = 0


def parse_int(raw: Optional[str]) -> Optional[int]:
    """Integer value of a query parameter, None when it is missing or not a 64-bit integer"""
    if isinstance(raw, int) and not isinstance(raw, bool):
        number = raw
    elif (
        isinstance(raw, str)
        and len(raw.strip()) <= MAX_INTEGER_DIGITS
        and INTEGER_PATTERN.fullmatch(raw)
    ):
        number = int(raw)
    else:
        return None
    if not INT64_MIN <= number <= INT64_MAX:
        return None
    return number


def decode_filters(raw: Optional[str]) -> Tuple[Any, bool]:
    """
    Decode the JSON filters parameter.

    Returns:
        (filters, discarded): filters is a list or dict, or None for
        "no filters"; discarded tells whether a non-empty value was ignored
    """
    if raw is None or raw == "":
        return None, False
    try:
        decoded = json.loads(raw)
    except (ValueError, RecursionError):
        return None, True
    if isinstance(decoded, (list, dict)):
        return decoded, False
    return None, True


def normalize_history_params(
    itemtype: Optional[str] = None,
    items_id: Optional[str] = None,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    sort: Optional[str] = None,
    order: Optional[str] = None,
    filters: Optional[str] = None,
) -> HistoryParams:
    discarded = 0

    parsed_items_id = parse_int(items_id)
    if parsed_items_id is None:
        if items_id is not None:
            discarded += 1
        parsed_items_id = 0

    parsed_limit = parse_int(limit)
    if parsed_limit is None:
        if limit is not None:
            discarded += 1
    else:
        parsed_limit = max(1, parsed_limit)

    parsed_offset = parse_int(offset)
    if parsed_offset is None:
        if offset is not None:
            discarded += 1
        parsed_offset = 0
    parsed_offset = max(0, parsed_offset)

    decoded_filters, filters_discarded = decode_filters(filters)
    if filters_discarded:
        discarded += 1

    params = HistoryParams(
        itemtype=itemtype or "",
        items_id=parsed_items_id,
        limit=parsed_limit,
        offset=parsed_offset,
        sort=sort or "",
        order=order or "",
        filters=decoded_filters,
        discarded=discarded,
    )
    if discarded:
        logger.debug(f"Ignored {discarded} history request parameter(s)")
    return params


def resolve_limit(limit: Optional[int], preferred: Optional[int], default: int, maximum: int) -> int:
    """Page size: request value, else user preference, else configured default"""
    if limit is None:
        limit = preferred if preferred else default
    return min(max(1, limit), maximum)
