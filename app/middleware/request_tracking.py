"""
Request Tracking Middleware
Tags every request with an id, times it and cuts off requests that run too long
"""
import asyncio
import time
import uuid
from typing import Dict

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.config import settings
from app.core.logging_config import get_logger
from app.database.session import request_deadline
from app.utils.response_utils import ResponseWrapper

logger = get_logger(__name__)


class RequestTracker:
    """Process-wide request counters, reported by the health endpoint"""

    def __init__(self):
        self.stats = {
            "total_requests": 0,
            "total_errors": 0,
            "total_timeouts": 0,
            "total_response_time": 0.0,
        }

    def log_request(self, request: Request, status_code: int, response_time: float, request_id: str):
        self.stats["total_requests"] += 1
        self.stats["total_response_time"] += response_time
        if status_code >= 400:
            self.stats["total_errors"] += 1

        logger.debug(
            f"{request.method} {request.url.path} -> {status_code} "
            f"in {response_time * 1000:.0f}ms [{request_id}]"
        )
        if response_time > settings.SLOW_REQUEST_THRESHOLD_SECONDS:
            logger.warning(
                f"SLOW REQUEST: {request.method} {request.url.path} - "
                f"{response_time * 1000:.0f}ms - Status: {status_code}"
            )

    def get_request_stats(self) -> Dict:
        total = self.stats["total_requests"]
        return {
            "total_requests": total,
            "total_errors": self.stats["total_errors"],
            "total_timeouts": self.stats["total_timeouts"],
            "avg_response_time_ms": round(self.stats["total_response_time"] * 1000 / total, 2) if total else 0,
        }


request_tracker = RequestTracker()


class RequestTrackingMiddleware(BaseHTTPMiddleware):
    """Adds X-Request-ID / X-Response-Time and enforces REQUEST_TIMEOUT_SECONDS"""

    def __init__(self, app, timeout_seconds: float = None):
        super().__init__(app)
        self.timeout_seconds = timeout_seconds or settings.REQUEST_TIMEOUT_SECONDS

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.time()
        # Sessions opened while serving this request refuse to commit past the deadline
        deadline_token = request_deadline.set(time.monotonic() + self.timeout_seconds)

        try:
            response = await asyncio.wait_for(call_next(request), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            response_time = time.time() - start_time
            request_tracker.stats["total_timeouts"] += 1
            logger.error(
                f"REQUEST TIMEOUT: {request.method} {request.url.path} exceeded {self.timeout_seconds}s [{request_id}]"
            )
            response = JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=ResponseWrapper.error(message="Request timed out", error_code="REQUEST_TIMEOUT"),
            )
            request_tracker.log_request(request, response.status_code, response_time, request_id)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            request_deadline.reset(deadline_token)

        response_time = time.time() - start_time
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{response_time * 1000:.2f}ms"
        request_tracker.log_request(request, response.status_code, response_time, request_id)
        return response
