import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy import text

from app.api.deps import build_item_service
from app.api.routes import items
from app.core.config import settings
from app.core.observability import MetricsRegistry, ObservabilityMiddleware, configure_logging
from app.db import session as db_session


configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Items Service")
metrics_registry = MetricsRegistry()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["*"],
)
app.add_middleware(
    ObservabilityMiddleware,
    registry=metrics_registry,
    exclude_paths={"/metrics", "/health"},
)

app.include_router(items.router)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return JSONResponse(
        status_code=422,
        content={"error": "; ".join(messages)},
    )


@app.get("/health")
def health():
    details = {"api": "ok"}
    failures: list[str] = []

    try:
        with db_session.SessionLocal() as db:
            db.execute(text("SELECT 1"))
        details["db"] = "ok"
    except Exception as exc:
        details["db"] = "error"
        details["db_error"] = str(exc)
        failures.append("db")

    status_label = "ok" if not failures else "degraded"
    payload = {"status": status_label, "checks": details}
    status_code = 200 if not failures else 503
    return JSONResponse(payload, status_code=status_code)


@app.get("/metrics", response_class=PlainTextResponse)
def metrics():
    return PlainTextResponse(
        metrics_registry.render_prometheus(),
        media_type="text/plain; version=0.0.4; charset=utf-8",
    )


@app.on_event("startup")
def startup_services():
    app.state.item_service = build_item_service()
    logger.info("Item service ready")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.server_host, port=settings.server_port)
