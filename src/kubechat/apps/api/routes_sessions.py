from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from kubechat.core.logging.context import log_context
from kubechat.core.sessions.registry import ChatSession, SessionRegistry
from kubechat.core.sessions.schemas import ActionResponse, SessionListResponse, SessionView, SubmitRequest

from .deps import get_session_registry

router = APIRouter()


def _get_session(session_id: str, registry: SessionRegistry) -> ChatSession:
    try:
        return registry.get(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="session not found") from None


def _respond(session: ChatSession, accepted: bool, detail: str | None = None) -> ActionResponse:
    return ActionResponse(accepted=accepted, detail=None if accepted else detail, session=session.view())


@router.post("", response_model=SessionView)
async def create_session(registry: SessionRegistry = Depends(get_session_registry)) -> SessionView:
    return registry.create().view()


@router.get("", response_model=SessionListResponse)
async def list_sessions(registry: SessionRegistry = Depends(get_session_registry)) -> SessionListResponse:
    return SessionListResponse(sessions=registry.list_ids(), count=len(registry))


@router.get("/{session_id}", response_model=SessionView)
async def get_session(
    session_id: str,
    after: int | None = Query(default=None, ge=0),
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionView:
    return _get_session(session_id, registry).view(after_id=after)


@router.post("/{session_id}/messages", response_model=ActionResponse)
async def submit_message(
    session_id: str,
    request: SubmitRequest,
    registry: SessionRegistry = Depends(get_session_registry),
) -> ActionResponse:
    session = _get_session(session_id, registry)
    with log_context(session_id=session_id):
        accepted = await session.controller.submit(request.query)
    detail = "a command is already pending" if session.controller.phase != "idle" else "query is empty"
    return _respond(session, accepted, detail)


@router.post("/{session_id}/execute", response_model=ActionResponse)
async def execute_command(session_id: str, registry: SessionRegistry = Depends(get_session_registry)) -> ActionResponse:
    session = _get_session(session_id, registry)
    accepted = await session.controller.execute()
    return _respond(session, accepted, "no command is awaiting review")


@router.post("/{session_id}/dry-run", response_model=ActionResponse)
async def dry_run_command(session_id: str, registry: SessionRegistry = Depends(get_session_registry)) -> ActionResponse:
    session = _get_session(session_id, registry)
    accepted = await session.controller.dry_run()
    return _respond(session, accepted, "no command is awaiting review")


@router.post("/{session_id}/cancel", response_model=ActionResponse)
async def cancel_command(session_id: str, registry: SessionRegistry = Depends(get_session_registry)) -> ActionResponse:
    session = _get_session(session_id, registry)
    accepted = session.controller.cancel()
    return _respond(session, accepted, "nothing to cancel")
