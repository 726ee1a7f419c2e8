import time
import json
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import structlog
from uuid import uuid4

logger = structlog.get_logger()

BODY_METHODS = ("POST", "PUT", "PATCH", "DELETE")


def _flatten_body(body: bytes, content_type: str) -> dict:
    """Flatten a request body into ``body_<key>`` log fields, truncating long values."""
    if "application/json" not in content_type:
        return {"body": body.decode(errors="replace")[:200]}
    try:
        body_data = json.loads(body.decode())
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {"body": body.decode(errors="replace")[:200]}

    if not isinstance(body_data, dict):
        return {"body": str(body_data)[:200]}

    flat = {}
    for key, value in body_data.items():
        if isinstance(value, (str, int, float, bool)) or value is None:
            flat[f"body_{key}"] = value
        elif isinstance(value, list):
            # image lists can be long; count is enough
            flat[f"body_{key}_count"] = len(value)
        else:
            flat[f"body_{key}"] = str(value)[:100]
    return flat


class LoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid4())
        start_time = time.time()

        # Auth headers are never logged
        log_data = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "client_ip": request.client.host if request.client else None,
            "user_agent": request.headers.get("user-agent", "")[:100],
        }

        if request.query_params:
            log_data["query_params"] = dict(request.query_params)

        if request.method in BODY_METHODS:
            # A body that can't be read is logged, never allowed to fail the request
            try:
                body = await request.body()
                if body:
                    log_data.update(_flatten_body(body, request.headers.get("content-type", "")))
            except Exception as e:
                log_data["body_error"] = str(e)

        logger.info("API Request Started", **log_data)

        request.state.request_id = request_id
        request.state.start_time = start_time

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                "API Request Failed",
                request_id=request_id,
                path=request.url.path,
                method=request.method,
                error=str(e),
                process_time=round(process_time, 4)
            )
            raise

        process_time = time.time() - start_time

        response_log_data = {
            "request_id": request_id,
            "path": request.url.path,
            "method": request.method,
            "status_code": response.status_code,
            "process_time": round(process_time, 4),
        }

        if response.status_code >= 400:
            logger.warning("API Request Completed with Error", **response_log_data)
        else:
            logger.info("API Request Completed Successfully", **response_log_data)

        response.headers["X-Request-ID"] = request_id
        return response


class StructlogMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next):
        request_id = getattr(request.state, "request_id", str(uuid4()))

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=request.url.path,
            method=request.method
        )

        try:
            return await call_next(request)
        finally:
            structlog.contextvars.clear_contextvars()
