"""HTTP client for a remote wordcalc server."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import httpx

from wordcalc.interp.errors import ErrorKind
from wordcalc.service.models import ExpressionError, Method
from wordcalc.utils.logging import get_correlation_id, get_logger
from wordcalc.web.app import ERRORS_ENDPOINT

logger = get_logger("web.client")


class ClientError(Exception):
    """
    A remote call failed.

    ``kind`` is set when the server rejected the expression itself (HTTP 400
    with a known message); it is None for transport and server faults.
    """

    def __init__(self, message: str, kind: Optional[ErrorKind] = None) -> None:
        self.kind = kind
        super().__init__(message)


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    reason: Optional[str] = None


class ExpressionHTTPClient:
    """Calls the /evaluate, /validate and /errors endpoints."""

    def __init__(
        self,
        base_url: str,
        client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout)

    def evaluate(self, expression: str) -> int:
        data = self._post(Method.EVALUATE.endpoint, {"expression": expression})
        return int(data["result"])

    def validate(self, expression: str) -> ValidationResult:
        data = self._post(Method.VALIDATE.endpoint, {"expression": expression})
        return ValidationResult(valid=bool(data["valid"]), reason=data.get("reason"))

    def get_expression_errors(self) -> list[ExpressionError]:
        data = self._request("GET", ERRORS_ENDPOINT)
        try:
            return [ExpressionError.from_dict(item) for item in data or []]
        except (KeyError, ValueError) as e:
            raise ClientError(f"malformed errors response: {e}") from e

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> ExpressionHTTPClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _post(self, path: str, payload: dict) -> Any:
        return self._request("POST", path, json=payload)

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = self.base_url + path
        headers = {"X-Correlation-ID": get_correlation_id()}

        try:
            response = self._client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error("request_failed", url=url, error=str(e))
            raise ClientError(f"request to {url} failed: {e}") from e

        if response.status_code != 200:
            raise _server_error(response)

        try:
            return response.json()
        except ValueError as e:
            raise ClientError(f"invalid JSON from {url}") from e


def _server_error(response: httpx.Response) -> ClientError:
    try:
        message = response.json().get("message", "")
    except (ValueError, AttributeError):
        message = response.text

    if response.status_code == 400:
        kind = ErrorKind.from_message(message)
        if kind is not None:
            return ClientError(message, kind=kind)
        return ClientError(f"unknown error response: {message}")

    return ClientError(message or f"server returned {response.status_code}")
