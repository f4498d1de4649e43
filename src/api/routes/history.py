"""
History API Routes

Serves the change history of trackable items to the history grid.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from config import ApplicationConfig
from src.api.responses import HistoryJSONResponse, empty_history_response, history_response
from src.api.utils.jwt import USER_CLAIM
from src.api.utils.request_params import normalize_history_params, parse_int, resolve_limit
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.history import GetHistoryUseCase, encode_history
from src.app.use_cases.users import LoadActorUseCase
from src.depends import get_optional_claims, get_unit_of_work

router = APIRouter(prefix="/ajax/v2", tags=["History"])


class HistoryRowResponse(BaseModel):
    """Single history line in response"""

    id: int
    date_mod: str
    user_name: str
    field: str
    change: str


class HistoryResponse(BaseModel):
    """GET /ajax/v2/log response payload"""

    total: int
    rows: List[HistoryRowResponse]


@router.get(
    "/log",
    status_code=status.HTTP_200_OK,
    response_model=HistoryResponse,
    response_class=HistoryJSONResponse,
)
async def get_log_history(
    claims: Optional[dict] = Depends(get_optional_claims),
    uow: UnitOfWork = Depends(get_unit_of_work),
    itemtype: Optional[str] = Query(None, description="Trackable type, e.g. Computer"),
    items_id: Optional[str] = Query(None, description="Item ID, must be > 0"),
    limit: Optional[str] = Query(None, description="Page size, defaults to the user's list size"),
    offset: Optional[str] = Query(None, description="Rows to skip"),
    sort: Optional[str] = Query(None, description="Sort key"),
    order: Optional[str] = Query(None, description="asc or desc"),
    filters: Optional[str] = Query(None, description="JSON encoded filter criteria"),
):
    """
    Get Item History

    Returns one page of the change history of an item for the history grid.

    Query Parameters:
        - itemtype, items_id: the item
        - limit, offset: page window (limit >= 1, offset >= 0)
        - sort, order: ordering, unknown keys fall back to id
        - filters: JSON array of {field, operator, value}, or an object of field: value

    Returns:
        - total: number of matching events, hidden ones included
        - rows: displayable events with id, date_mod, user_name, field, change

    Always answers 200. Anonymous callers, missing rights, unknown items,
    malformed parameters and storage outages all give {"total":0,"rows":[]}.
    """
    if claims is None:
        return empty_history_response()

    user_id = parse_int(claims.get(USER_CLAIM))
    if user_id is None or user_id <= 0:
        return empty_history_response()

    params = normalize_history_params(
        itemtype=itemtype,
        items_id=items_id,
        limit=limit,
        offset=offset,
        sort=sort,
        order=order,
        filters=filters,
    )

    # Execute use cases
    actor = await LoadActorUseCase(uow).execute(user_id)
    if actor is None:
        return empty_history_response()

    page = await GetHistoryUseCase(uow).execute(
        actor,
        params.itemtype,
        params.items_id,
        raw_filters=params.filters,
        sort=params.sort,
        order=params.order,
        offset=params.offset,
        limit=resolve_limit(
            params.limit,
            actor.list_limit,
            ApplicationConfig.DEFAULT_LIST_LIMIT,
            ApplicationConfig.MAX_LIST_LIMIT,
        ),
    )

    return history_response(encode_history(page.total, page.rows))
