"""Sessions API routes."""

from fastapi import APIRouter, Depends, HTTPException

from tlitrack.api.dependencies import get_store
from tlitrack.api.schemas import (
    DropItemModel,
    DropRequest,
    EndSessionRequest,
    SessionResponse,
    StartSessionRequest,
)
from tlitrack.core.models import Session
from tlitrack.storage import (
    NoActiveSessionError,
    SessionNotFoundError,
    SessionStore,
    StorageError,
)

router = APIRouter(prefix="/api", tags=["sessions"])


def _to_response(session: Session) -> SessionResponse:
    return SessionResponse(
        id=session.id,
        map=session.map,
        notes=session.notes,
        start_time=session.start_time,
        end_time=session.end_time,
        drops=[DropItemModel(**d.to_dict()) for d in session.drops],
        is_active=session.is_active,
        total_value=session.total_value(),
        duration_minutes=session.duration_minutes(),
        profit_per_minute=session.profit_per_minute(),
    )


def _http_error(e: Exception) -> HTTPException:
    if isinstance(e, SessionNotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, NoActiveSessionError):
        return HTTPException(status_code=400, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))


@router.get("/sessions", response_model=list[SessionResponse])
def list_sessions(store: SessionStore = Depends(get_store)) -> list[SessionResponse]:
    """All recorded sessions, oldest first."""
    try:
        return [_to_response(s) for s in store.load()]
    except StorageError as e:
        raise _http_error(e)


@router.post("/start", response_model=SessionResponse)
def start_session(
    body: StartSessionRequest,
    store: SessionStore = Depends(get_store),
) -> SessionResponse:
    """Start a new session."""
    try:
        return _to_response(store.start(body.map, body.notes))
    except StorageError as e:
        raise _http_error(e)


@router.post("/end", response_model=SessionResponse)
def end_session(
    body: EndSessionRequest = EndSessionRequest(),
    store: SessionStore = Depends(get_store),
) -> SessionResponse:
    """End a session (the active one if no id is given)."""
    try:
        session, _ = store.end(body.session)
    except (SessionNotFoundError, NoActiveSessionError, StorageError) as e:
        raise _http_error(e)
    return _to_response(session)


@router.post("/drop", response_model=SessionResponse)
def add_drop(
    body: DropRequest,
    store: SessionStore = Depends(get_store),
) -> SessionResponse:
    """Record a drop on a session (the active one if no id is given)."""
    quantity = body.quantity if body.quantity is not None else 1
    if quantity < 1:
        raise HTTPException(status_code=400, detail="Quantity must be at least 1")
    try:
        session = store.add_drop(body.name, body.value, quantity, body.session)
    except (SessionNotFoundError, NoActiveSessionError, StorageError) as e:
        raise _http_error(e)
    return _to_response(session)
