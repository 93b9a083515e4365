"""HTTP server and client for the expression service."""

from wordcalc.web.app import create_app
from wordcalc.web.client import ClientError, ExpressionHTTPClient, ValidationResult

__all__ = ["create_app", "ClientError", "ExpressionHTTPClient", "ValidationResult"]
