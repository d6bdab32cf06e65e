"""Middleware components for request processing."""

from .correlation_id import bind_request_id, correlation_id_middleware, get_request_id

__all__ = ["bind_request_id", "correlation_id_middleware", "get_request_id"]
