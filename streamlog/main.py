import time
from typing import Any, Dict, Optional
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse

from streamlog.config import Settings
from streamlog.levels import LogLevel
from streamlog.telemetry import StreamLogger


def level_for_status(status_code: int) -> LogLevel:
    if status_code >= 500:
        return LogLevel.ERROR
    if status_code >= 400:
        return LogLevel.WARNING
    return LogLevel.INFO


def create_app(writer: StreamLogger, title: str = "streamlog") -> FastAPI:
    """Build the service; every request is logged as one line through ``writer``."""
    app = FastAPI(title=title)
    app.state.writer = writer

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        request_id = str(uuid4())
        start = time.perf_counter()

        status_code = 500
        error_message = None

        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            return response
        except Exception as e:
            error_message = f"{type(e).__name__}: {e}"
            return JSONResponse(status_code=500, content={"error": "unhandled_exception"})
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000.0
            context = {
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "query": str(request.url.query),
                "status_code": status_code,
                "latency_ms": round(elapsed_ms, 2),
            }
            if error_message:
                context["error"] = error_message
            writer.log(level_for_status(status_code), f"{request.method} {request.url.path}", context)

    @app.get("/health")
    def health():
        return {"status": "ok", "log_open": writer.is_open}

    @app.post("/events")
    async def create_event(payload: Dict[str, Any]):
        """
        Write a client-supplied record to the log.
        Expected JSON body:
          {
            "level": "warning",
            "message": "disk almost full",
            "context": {"free_mb": 120}
          }
        """
        message = str(payload.get("message", "")).strip()
        context: Optional[Dict[str, Any]] = payload.get("context")

        if not message:
            raise HTTPException(status_code=400, detail="message is required")
        if context is None:
            context = {}
        if not isinstance(context, dict):
            raise HTTPException(status_code=400, detail="context must be an object")
        try:
            level = LogLevel.coerce(payload.get("level", "info"))
        except ValueError:
            raise HTTPException(status_code=400, detail="level must be a known log level")

        writer.log(level, message, context)
        return {"status": "written", "level": level.label}

    return app


app = create_app(Settings.from_env().build_logger())
