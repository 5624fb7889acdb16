"""Unit tests for ErrorFactory classification."""

import uuid

import httpx
import pytest

from yenipara_sdk.core.errors import ErrorFactory
from yenipara_sdk.errors import (
    ClientError,
    InvalidResponseError,
    NetworkUnavailableError,
    ServerError,
    ServerErrorWithMessage,
    UnauthorizedError,
)
from yenipara_sdk.models import FALLBACK_ERROR_MESSAGE
from yenipara_sdk.types import HttpFailure, TransportFailure


class TestFromHttpFailure:
    """Tests for classifying non-2xx responses."""

    def test_401_is_unauthorized(self) -> None:
        error = ErrorFactory.from_http_failure(
            HttpFailure(401, b'{"error": "expired"}'), correlation_id="c-1"
        )
        assert isinstance(error, UnauthorizedError)
        assert error.correlation_id == "c-1"

    def test_4xx_without_body_is_client_error(self) -> None:
        error = ErrorFactory.from_http_failure(HttpFailure(404, b""))
        assert isinstance(error, ClientError)
        assert error.status_code == 404

    def test_4xx_with_message_is_server_error_with_message(self) -> None:
        error = ErrorFactory.from_http_failure(
            HttpFailure(400, b'{"success": false, "error": "Email taken"}')
        )
        assert isinstance(error, ServerErrorWithMessage)
        assert error.message == "Email taken"
        assert error.status_code == 400

    def test_4xx_error_object_without_message_uses_fallback(self) -> None:
        error = ErrorFactory.from_http_failure(HttpFailure(422, b'{"success": false}'))
        assert isinstance(error, ServerErrorWithMessage)
        assert error.message == FALLBACK_ERROR_MESSAGE
        assert error.status_code == 422

    def test_4xx_with_non_json_body_is_client_error(self) -> None:
        error = ErrorFactory.from_http_failure(HttpFailure(403, b"<html>Forbidden</html>"))
        assert isinstance(error, ClientError)

    def test_5xx_is_server_error(self) -> None:
        error = ErrorFactory.from_http_failure(HttpFailure(503, b""))
        assert isinstance(error, ServerError)
        assert error.status_code == 503
        assert error.is_retryable

    def test_5xx_keeps_body_message(self) -> None:
        error = ErrorFactory.from_http_failure(
            HttpFailure(500, b'{"message": "Database unavailable"}')
        )
        assert isinstance(error, ServerError)
        assert error.message == "Database unavailable"

    @pytest.mark.parametrize("status", [101, 302, 304, 600])
    def test_other_statuses_are_invalid_response(self, status: int) -> None:
        error = ErrorFactory.from_http_failure(HttpFailure(status, b""))
        assert isinstance(error, InvalidResponseError)
        assert error.status_code == status


class TestFromTransportFailure:
    """Tests for classifying failed round trips."""

    @pytest.mark.parametrize(
        "cause",
        [
            TimeoutError(),
            httpx.ReadTimeout("slow"),
            httpx.ConnectError("refused"),
        ],
    )
    def test_network_causes(self, cause: BaseException) -> None:
        error = ErrorFactory.from_transport_failure(TransportFailure(cause))
        assert isinstance(error, NetworkUnavailableError)

    def test_protocol_error_is_invalid_response(self) -> None:
        cause = httpx.RemoteProtocolError("bad framing")
        error = ErrorFactory.from_transport_failure(
            TransportFailure(cause), correlation_id="c-2"
        )
        assert isinstance(error, InvalidResponseError)
        assert error.__cause__ is cause
        assert error.correlation_id == "c-2"


class TestFromException:
    """Tests for wrapping unexpected exceptions."""

    def test_sdk_error_passes_through(self) -> None:
        original = ClientError(404)
        error = ErrorFactory.from_exception(original, correlation_id="c-3")
        assert error is original
        assert error.correlation_id == "c-3"

    def test_existing_correlation_id_kept(self) -> None:
        original = ClientError(404, correlation_id="first")
        assert ErrorFactory.from_exception(original, correlation_id="second").correlation_id == "first"

    def test_httpx_error_classified(self) -> None:
        error = ErrorFactory.from_exception(httpx.ConnectError("down"))
        assert isinstance(error, NetworkUnavailableError)

    def test_unknown_exception_wrapped(self) -> None:
        cause = RuntimeError("boom")
        error = ErrorFactory.from_exception(cause)
        assert isinstance(error, InvalidResponseError)
        assert error.__cause__ is cause


def test_correlation_ids_are_uuids() -> None:
    first = ErrorFactory.generate_correlation_id()
    second = ErrorFactory.generate_correlation_id()
    assert first != second
    assert uuid.UUID(first).version == 4
