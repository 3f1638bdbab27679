"""Mention client - handles low-level API calls."""

import json
import logging
import uuid
from typing import Any

import anyio
import httpx

from .config import Config, get_config
from .consts import USER_AGENT
from .exceptions import (
    AccessDeniedError,
    InvalidCredentialError,
    NetworkError,
    RateLimitError,
    RequestTimeoutError,
    UpstreamError,
    UpstreamProtocolError,
)

logger = logging.getLogger("mention-mcp.client")

# Statuses whose meaning does not depend on the response body
FIXED_STATUS_ERRORS: dict[int, tuple[type[UpstreamError], str]] = {
    401: (InvalidCredentialError, "Invalid API key"),
    403: (AccessDeniedError, "Access denied"),
    429: (RateLimitError, "Rate limit exceeded - please try again later"),
}

_NO_BODY = object()


class MentionClient:
    """Mention API client with bearer authentication.

    Responsibilities:
    - Issue exactly one authenticated HTTP call per request
    - Bound every call by the configured timeout
    - Map transport and HTTP failures onto the error taxonomy
    """

    def __init__(
        self,
        config: Config | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize MentionClient.

        Args:
            config: Config instance. If None, uses get_config().
            http_client: HTTP client. If None, creates (and owns) a new one.
        """
        self.config = config or get_config()
        self._owns_http_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(
            timeout=self.config.timeout_seconds,
        )
        logger.info(f"Mention client created for {self.config.base_url}")

    @property
    def default_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        *,
        json_body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Perform one API call and return the decoded JSON body.

        Args:
            endpoint: Path (and encoded query string) relative to base_url.
            method: HTTP method.
            json_body: Optional JSON-serializable request body.
            headers: Header overrides applied after the default headers.

        Returns:
            Decoded JSON body, or None for an empty successful response.

        Raises:
            RequestTimeoutError: If no response arrives within the timeout.
            NetworkError: For DNS, connection and other transport failures.
            InvalidCredentialError: For HTTP 401.
            AccessDeniedError: For HTTP 403.
            RateLimitError: For HTTP 429.
            UpstreamError: For other statuses with a recognised error body.
            UpstreamProtocolError: For responses that cannot be interpreted.
        """
        url = f"{self.config.base_url}{endpoint}"
        request_id = uuid.uuid4().hex[:8]
        request_headers = {**self.default_headers, **(headers or {})}

        logger.debug(f"[{request_id}] {method} {endpoint}")

        try:
            with anyio.fail_after(self.config.timeout_seconds):
                response = await self.http_client.request(
                    method,
                    url,
                    headers=request_headers,
                    json=json_body,
                )
        except (TimeoutError, httpx.TimeoutException) as e:
            logger.error(
                f"[{request_id}] {method} {endpoint} timed out after "
                f"{self.config.request_timeout_ms}ms"
            )
            raise RequestTimeoutError(
                "Request timeout",
                suggestions=["Try again - the Mention API may be slow to respond"],
                context={
                    "endpoint": endpoint,
                    "timeout_ms": self.config.request_timeout_ms,
                },
            ) from e
        except httpx.RequestError as e:
            message = f"Network request failed: {e}"
            logger.error(f"[{request_id}] {message}")
            raise NetworkError(
                message,
                suggestions=[
                    "Check your internet connection",
                    "Verify MENTION_API_BASE_URL is correct",
                ],
                context={"endpoint": endpoint},
            ) from e

        if not response.is_success:
            error = self._error_from_response(response)
            logger.error(
                f"[{request_id}] {method} {endpoint} failed with "
                f"{response.status_code}: {error.message}"
            )
            raise error

        try:
            body = self._decode_success(response)
        except UpstreamProtocolError as e:
            logger.error(f"[{request_id}] {method} {endpoint} {e.message}")
            raise

        logger.debug(f"[{request_id}] {method} {endpoint} successful")
        return body

    def _error_from_response(self, response: httpx.Response) -> UpstreamError:
        status = response.status_code
        body = _decode_json(response)

        if status in FIXED_STATUS_ERRORS:
            error_cls, message = FIXED_STATUS_ERRORS[status]
            return error_cls(
                message,
                status_code=status,
                body=None if body is _NO_BODY else body,
            )

        if body is _NO_BODY:
            return UpstreamProtocolError(
                f"HTTP {status}: {response.reason_phrase}",
                status_code=status,
                body=response.text or None,
            )

        message = describe_error_body(body)
        if message is not None:
            return UpstreamError(message, status_code=status, body=body)

        return UpstreamProtocolError(
            f"HTTP {status}: {response.reason_phrase} - {json.dumps(body)}",
            status_code=status,
            body=body,
        )

    def _decode_success(self, response: httpx.Response) -> Any:
        if not response.content:
            return None

        body = _decode_json(response)
        if body is _NO_BODY:
            raise UpstreamProtocolError(
                f"HTTP {response.status_code}: response body is not valid JSON",
                status_code=response.status_code,
                body=response.text,
            )
        return body

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> "MentionClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


def _decode_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return _NO_BODY


def describe_error_body(body: Any) -> str | None:
    """Human-readable message for a recognised Mention error body.

    Two shapes are recognised:
    - {"error": {"code": ..., "message": ..., "details": ...}}
    - {"form": {"errors": [...], "children": {field: {"errors": [...]}}}}

    Returns None when the body matches neither.
    """
    if not isinstance(body, dict):
        return None

    error = body.get("error")
    if isinstance(error, dict) and error.get("message"):
        message = str(error["message"])
        if error.get("details"):
            message += f" - {error['details']}"
        return message

    form = body.get("form")
    if isinstance(form, dict):
        parts = []
        form_errors = [str(e) for e in form.get("errors") or []]
        if form_errors:
            parts.append(f"Form errors: {', '.join(form_errors)}")
        field_errors = collect_field_errors(form.get("children") or {})
        if field_errors:
            parts.append(f"Field errors: {'; '.join(field_errors)}")
        if parts:
            return ". ".join(parts)

    return None


def collect_field_errors(children: dict, prefix: str = "") -> list[str]:
    """Flatten nested form errors into "dotted.path: message" strings."""
    errors = []
    if not isinstance(children, dict):
        return errors

    for name, detail in children.items():
        if not isinstance(detail, dict):
            continue
        path = f"{prefix}.{name}" if prefix else str(name)
        errors.extend(f"{path}: {e}" for e in detail.get("errors") or [])
        errors.extend(collect_field_errors(detail.get("children") or {}, path))
    return errors
