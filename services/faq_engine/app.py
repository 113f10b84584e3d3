from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Query, Request

from services.shared.config import ConfigStore
from services.shared.matcher import FaqEngine
from services.shared.models import HealthResponse, MatchResult, QueryRequest, SuggestionResponse
from services.shared.otel import instrument_fastapi
from services.shared.runtime import ensure_request_id, get_runtime_config, setup_logging


SERVICE_NAME = "faq-engine"

setup_logging(service_name=SERVICE_NAME)
logger = logging.getLogger("faqbot.faq_engine")

_RUNTIME = get_runtime_config(service_name=SERVICE_NAME)

app = FastAPI(title="FAQ Retrieval Engine", version="0.1.0")
config = ConfigStore()
engine = FaqEngine(config.engine_settings(kb_path_override=_RUNTIME.kb_path))

# No-op unless FAQBOT_OTEL_ENABLED=1.
instrument_fastapi(app, service_name=SERVICE_NAME)


@app.on_event("startup")
def _load_knowledge_base():
    # One-shot; a failed load leaves the engine answering with the empty reply.
    engine.load()


@app.middleware("http")
async def _request_id_mw(request: Request, call_next):
    rid = ensure_request_id(request.headers.get(_RUNTIME.request_id_header))
    started = time.perf_counter()
    request.state.request_id = rid
    resp = await call_next(request)
    resp.headers.setdefault("X-Request-Id", rid)
    logger.info(
        "request",
        extra={
            "request_id": rid,
            "method": request.method,
            "path": request.url.path,
            "status_code": getattr(resp, "status_code", None),
            "duration_ms": int((time.perf_counter() - started) * 1000),
        },
    )
    return resp


@app.get("/health", response_model=HealthResponse)
def health():
    ctx = engine.context
    return HealthResponse(
        ok=True,
        service=SERVICE_NAME,
        ready=engine.ready,
        entries=len(ctx.entries),
        vocabulary=len(ctx.vocabulary),
    )


@app.post("/query", response_model=MatchResult)
def query(req: QueryRequest):
    return engine.submit_query(req.text.strip())


@app.get("/suggest", response_model=SuggestionResponse)
def suggestions(q: str = Query("", max_length=200)):
    return SuggestionResponse(suggestions=engine.suggest(q))


@app.get("/faq")
def list_faq():
    return {"entries": [e.model_dump(mode="json") for e in engine.context.entries]}
