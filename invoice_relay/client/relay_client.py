"""
HTTP Client for the relay backend.

Packages message text, channel id and an optional attachment into a
multipart POST to the backend and translates the reply into a
RelayResult. Transport failures are reported as network errors, never
raised to the form.
"""

from dataclasses import dataclass
from typing import Any

import httpx

from invoice_relay.backend.core.config import get_app_config, get_server_base_url
from invoice_relay.backend.core.config_schema import RelayClientSchema
from invoice_relay.backend.core.exceptions import NetworkError, ValidationError
from invoice_relay.backend.core.logging import get_logger, log_with_source
from invoice_relay.telegram.models import Attachment, ErrorKind, RelayResult

logger = get_logger(__name__)

UNSUPPORTED_TYPE_MESSAGE = "Неподдерживаемый тип файла. Разрешены: изображения, PDF, Word, Excel"

# Error code prefix -> failure kind, see backend/core/exceptions.py
_CODE_PREFIX_KINDS = {
    "VAL_": ErrorKind.VALIDATION,
    "CFG_": ErrorKind.CONFIGURATION,
    "EXT_": ErrorKind.PROVIDER_RESPONSE,
    "NET_": ErrorKind.NETWORK,
}


@dataclass(frozen=True)
class UploadPolicy:
    """Client-side limits applied to an attachment before upload."""

    allowed_mime_types: frozenset[str]
    max_file_bytes: int

    @classmethod
    def from_config(cls, config: RelayClientSchema | None = None) -> "UploadPolicy":
        if config is None:
            config = get_app_config().relay.client
        return cls(
            allowed_mime_types=frozenset(config.allowed_mime_types),
            max_file_bytes=config.max_file_bytes,
        )

    def check(self, mime_type: str, size: int) -> None:
        """
        Raise ValidationError with the user-facing text when a file is rejected.

        The type is checked before the size.
        """
        if mime_type not in self.allowed_mime_types:
            raise ValidationError(UNSUPPORTED_TYPE_MESSAGE)
        if size > self.max_file_bytes:
            raise ValidationError(
                f"Файл слишком большой. Максимальный размер: {self.max_file_bytes // (1024 * 1024)}MB"
            )


def _kind_for(code: str | None, status_code: int) -> ErrorKind:
    if code:
        for prefix, kind in _CODE_PREFIX_KINDS.items():
            if code.startswith(prefix):
                return kind
    if 400 <= status_code < 500:
        return ErrorKind.VALIDATION
    return ErrorKind.PROVIDER_RESPONSE


class RelayClient:
    """
    HTTP client for the relay endpoint.

    Usage:
        client = RelayClient()
        result = await client.send_message(text, "-1002988617200", attachment)
        await client.close()
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        endpoint_path: str | None = None,
        policy: UploadPolicy | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the relay client.

        Args:
            base_url: Backend base URL. If None, reads from config/settings/application.yaml.
            timeout: Request timeout in seconds. If None, reads from config/settings/application.yaml.
            endpoint_path: Relay path. If None, reads from config/settings/relay.yaml.
            policy: Attachment limits. If None, reads from config/settings/relay.yaml.
            transport: Optional httpx transport, used by tests.
        """
        if base_url is None or timeout is None:
            config_base_url, config_timeout = get_server_base_url()
            base_url = base_url or config_base_url
            timeout = timeout if timeout is not None else config_timeout

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.endpoint_path = endpoint_path or get_app_config().relay.client.endpoint_path
        self.policy = policy or UploadPolicy.from_config()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"X-Frontend-ID": "cli"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """
        Make an HTTP request to the backend.

        Raises:
            NetworkError: The backend could not be reached or timed out
        """
        client = await self._get_client()

        log_with_source(logger, "cli", "debug", "API request", method=method, path=path)

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.TransportError as e:
            log_with_source(
                logger,
                "cli",
                "error",
                "API request failed",
                method=method,
                path=path,
                error=str(e) or type(e).__name__,
            )
            raise NetworkError(str(e) or type(e).__name__) from e

        log_with_source(
            logger,
            "cli",
            "debug",
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
        )
        return response

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a POST request."""
        return await self.request("POST", path, **kwargs)

    async def send_message(
        self,
        text: str,
        channel_id: str,
        attachment: Attachment | None = None,
    ) -> RelayResult:
        """
        Relay a message through the backend.

        The attachment is checked against the upload policy first; a
        rejected file never leaves the machine.
        """
        if attachment is not None:
            try:
                self.policy.check(attachment.mime_type, attachment.size)
            except ValidationError as e:
                return RelayResult.failed(ErrorKind.VALIDATION, details=e.message)

        # (None, value) parts keep the text fields in the multipart body
        parts: list[tuple[str, tuple]] = [
            ("message", (None, text)),
            ("channelId", (None, channel_id)),
        ]
        if attachment is not None:
            parts.append(("file", (attachment.filename, attachment.data, attachment.mime_type)))

        try:
            response = await self.post(self.endpoint_path, files=parts)
        except NetworkError as e:
            return RelayResult.failed(ErrorKind.NETWORK, details=e.message)

        return self._to_result(response)

    def _to_result(self, response: httpx.Response) -> RelayResult:
        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            body = {}

        if response.status_code == 200:
            return RelayResult.ok(body.get("message", ""), body.get("data"))

        details = body.get("details") or body.get("error") or response.text
        kind = _kind_for(body.get("code"), response.status_code)

        log_with_source(
            logger,
            "cli",
            "warning",
            "Relay rejected message",
            status_code=response.status_code,
            code=body.get("code"),
            error_kind=kind.value,
        )
        return RelayResult.failed(kind, details=details, message=body.get("error", ""))


# Module-level client instance
_client: RelayClient | None = None


def get_relay_client() -> RelayClient:
    """Get or create the relay client singleton."""
    global _client
    if _client is None:
        _client = RelayClient()
    return _client


async def close_relay_client() -> None:
    """Close the relay client."""
    global _client
    if _client:
        await _client.close()
        _client = None
