from __future__ import annotations

from uuid import uuid4

import uvicorn
from fastapi import Depends, FastAPI

from kubechat.core.config.settings import KubeChatSettings
from kubechat.core.http.client import build_timeout, request_json
from kubechat.core.http.errors import KubeChatHTTPError
from kubechat.core.logging import configure_logging
from kubechat.core.logging.context import log_context
from kubechat.core.sessions.schemas import SuggestionsResponse

from .deps import close_http_client, get_settings
from .routes_sessions import router as sessions_router

app = FastAPI(title="KubeChat API")
configure_logging(get_settings().logging)

app.include_router(sessions_router, prefix="/sessions", tags=["sessions"])


@app.middleware("http")
async def request_context_middleware(request, call_next):
    correlation_id = request.headers.get("X-Correlation-ID") or str(uuid4())
    with log_context(correlation_id=correlation_id):
        response = await call_next(request)
    response.headers["X-Correlation-ID"] = correlation_id
    return response


@app.on_event("shutdown")
async def shutdown_http_client() -> None:
    await close_http_client()


@app.get("/suggestions", response_model=SuggestionsResponse)
def suggestions(settings: KubeChatSettings = Depends(get_settings)) -> SuggestionsResponse:
    return SuggestionsResponse(suggestions=settings.conversation.suggestions)


@app.get("/healthz")
def healthz() -> dict[str, bool]:
    return {"ok": True}


@app.get("/healthz/full")
async def healthz_full(settings: KubeChatSettings = Depends(get_settings)) -> dict[str, object]:
    try:
        await request_json(
            "GET",
            settings.backend.health_url,
            timeout=build_timeout(1.0, 1.0),
            user_agent=settings.backend.user_agent,
            redact_url=True,
        )
        backend_reachable = True
    except KubeChatHTTPError:
        backend_reachable = False
    return {
        "ok": True,
        "backend_reachable": backend_reachable,
        "dry_run_mode": settings.approvals.dry_run_mode,
        "destructive_verbs": settings.approvals.destructive_verbs,
    }


if __name__ == "__main__":
    uvicorn.run("kubechat.apps.api.main:app", host="127.0.0.1", port=8000)
