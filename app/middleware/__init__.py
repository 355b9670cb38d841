"""
Middleware for the Sigap admin API
"""
from app.middleware.error_tracking import ErrorTrackingMiddleware, error_tracker
from app.middleware.request_tracking import RequestTrackingMiddleware, request_tracker

__all__ = [
    "ErrorTrackingMiddleware",
    "error_tracker",
    "RequestTrackingMiddleware",
    "request_tracker",
]
