"""
Error Tracking Middleware
Logs unhandled errors with the request context before the exception handlers turn them into a 500
"""
import time
from typing import Dict, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.logging_config import get_logger

logger = get_logger(__name__)

# Never written to the logs
SENSITIVE_HEADERS = {"authorization", "cookie", "x-api-key"}


class ErrorTracker:
    """Keeps per-type counts of unhandled errors"""

    def __init__(self):
        self.error_types: Dict[str, int] = {}

    def log_error(self, error: Exception, request: Request, response_time: float, user_info: Optional[Dict] = None):
        error_type = type(error).__name__
        self.error_types[error_type] = self.error_types.get(error_type, 0) + 1
        headers = {
            key: value for key, value in request.headers.items()
            if key.lower() not in SENSITIVE_HEADERS
        }
        logger.exception(
            f"ERROR TRACKED: {error_type} - {error} | {request.method} {request.url.path} "
            f"| query={dict(request.query_params)} | headers={headers} "
            f"| user={user_info or {}} | {response_time * 1000:.0f}ms"
        )

    def get_error_stats(self) -> Dict:
        return {
            "total_errors": sum(self.error_types.values()),
            "error_types": dict(self.error_types),
        }


error_tracker = ErrorTracker()


class ErrorTrackingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        try:
            return await call_next(request)
        except Exception as e:
            user = getattr(request.state, "user", None) or {}
            user_info = {"member_id": user.get("id"), "email": user.get("email")} if user else {}
            error_tracker.log_error(e, request, time.time() - start_time, user_info)
            # FastAPI's exception handlers build the response
            raise
