from fastapi.responses import JSONResponse

from src.app.use_cases.history import empty_history

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, max-age=0",
    "Pragma": "no-cache",
    "Expires": "Mon, 26 Jul 1997 05:00:00 GMT",
}


class HistoryJSONResponse(JSONResponse):
    media_type = "application/json; charset=UTF-8"


def history_response(content: dict) -> HistoryJSONResponse:
    return HistoryJSONResponse(content=content, headers=NO_CACHE_HEADERS)


def empty_history_response() -> HistoryJSONResponse:
    return history_response(empty_history())
