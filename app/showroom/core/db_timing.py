from __future__ import annotations

from contextvars import ContextVar, Token

# Accumulated SQL time for the request being served; None outside a request.
# A one-item list so endpoint tasks spawned from the middleware add to the
# same total instead of to a copied context value.
_request_db_ms: ContextVar[list[float] | None] = ContextVar("request_db_ms", default=None)


def begin_request_db_timer() -> Token:
    return _request_db_ms.set([0.0])


def end_request_db_timer(token: Token) -> None:
    _request_db_ms.reset(token)


def record_query_time(elapsed_ms: float) -> None:
    total = _request_db_ms.get()
    if total is not None:
        total[0] += elapsed_ms


def current_db_time_ms() -> float | None:
    total = _request_db_ms.get()
    return total[0] if total is not None else None


def is_tracking() -> bool:
    return _request_db_ms.get() is not None
