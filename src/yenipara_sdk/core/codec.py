"""Request encoding and response decoding for the YeniPara API.

Builds wire requests from ``RequestSpec`` and turns response bodies into
typed values or error messages.
"""

from __future__ import annotations

import functools
import re
from typing import TYPE_CHECKING, Any, TypeVar

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..errors import DecodingError, InvalidURLError
from ..models import FALLBACK_ERROR_MESSAGE, ErrorResponse

if TYPE_CHECKING:
    from ..config import ClientConfig
    from ..models import RequestSpec

T = TypeVar("T")

# Path segments whose data changes tick by tick
LIVE_MARKET_SEGMENTS = frozenset(
    {"quotes", "quote", "snapshots", "snapshot", "bars", "candles", "top-movers"}
)

_INVALID_PATH_CHARS = re.compile(r"[\s\x00-\x1f\x7f]")


def is_live_market_path(path: str) -> bool:
    """Check whether a path targets live market data.

    Matches any live segment (``/api/v1/market/candles``,
    ``/api/v1/stocks/AAPL/quotes``) as well as ``market/status``.
    """
    segments = [s for s in path.split("?", 1)[0].lower().split("/") if s]
    if any(s in LIVE_MARKET_SEGMENTS for s in segments):
        return True
    return any(a == "market" and b == "status" for a, b in zip(segments, segments[1:]))


@functools.lru_cache(maxsize=256)
def _type_adapter(target_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target_type)


def _type_name(target_type: Any) -> str:
    return getattr(target_type, "__name__", None) or repr(target_type)


class RequestCodec:
    """Serializes request specs and deserializes responses."""

    def __init__(self, config: ClientConfig) -> None:
        """Initialize codec.

        Args:
            config: SDK configuration (base URL, identification headers, timeouts).
        """
        self._config = config

    def build_url(self, path: str, params: dict[str, str] | None = None) -> httpx.URL:
        """Build the absolute URL for ``path``.

        Raises:
            InvalidURLError: If the path is not an absolute path or the result
                is not an http(s) URL.
        """
        raw = f"{self._config.base_url_str}{path}"
        if not path.startswith("/") or path.startswith("//") or _INVALID_PATH_CHARS.search(path):
            raise InvalidURLError(f"Invalid request path: {path!r}", url=raw)

        try:
            url = httpx.URL(raw)
        except (httpx.InvalidURL, ValueError) as e:
            raise InvalidURLError(f"Invalid URL: {e}", url=raw) from e

        if url.scheme not in ("http", "https") or not url.host:
            raise InvalidURLError(f"Unsupported URL: {raw}", url=raw)

        if params:
            url = url.copy_merge_params(params)
        return url

    def build_headers(self, spec: RequestSpec, token: str | None = None) -> dict[str, str]:
        """Headers for ``spec``; bearer token only for authenticated specs."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "X-Platform": self._config.platform,
            "X-App-Version": self._config.app_version,
        }
        if spec.requires_auth and token:
            headers["Authorization"] = f"Bearer {token}"
        if is_live_market_path(spec.path):
            headers["Cache-Control"] = "no-cache"
            headers["Pragma"] = "no-cache"
        return headers

    def encode(
        self,
        spec: RequestSpec,
        token: str | None = None,
        *,
        url: httpx.URL | None = None,
    ) -> httpx.Request:
        """Build the wire request for ``spec``.

        Deterministic: identical spec, token and config give identical
        method, URL, headers and body.
        """
        timeout = httpx.Timeout(
            spec.timeout or self._config.timeout,
            connect=self._config.connect_timeout,
        )
        return httpx.Request(
            spec.method.value,
            url or self.build_url(spec.path, spec.params),
            headers=self.build_headers(spec, token),
            json=spec.body,
            extensions={"timeout": timeout.as_dict()},
        )

    def decode_success(self, raw_body: bytes, target_type: type[T] | Any) -> T:
        """Decode a 2xx body into ``target_type``.

        ``bytes`` returns the body untouched; any other type is validated
        with pydantic.

        Raises:
            DecodingError: If the body does not match the target shape.
        """
        if target_type is bytes:
            return raw_body  # type: ignore[return-value]
        try:
            return _type_adapter(target_type).validate_json(raw_body)
        except PydanticValidationError as e:
            raise DecodingError(
                f"Response does not match {_type_name(target_type)}",
                target=_type_name(target_type),
                cause=e,
            ) from e

    @staticmethod
    def parse_error_body(raw_body: bytes) -> ErrorResponse | None:
        """Parse an error body; ``None`` unless it is a JSON object."""
        if not raw_body:
            return None
        try:
            return ErrorResponse.model_validate_json(raw_body)
        except PydanticValidationError:
            return None

    def decode_error(self, raw_body: bytes) -> str:
        """Best-effort error message from an error body."""
        parsed = self.parse_error_body(raw_body)
        if parsed is None:
            return FALLBACK_ERROR_MESSAGE
        return parsed.display_message
