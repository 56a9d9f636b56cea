from __future__ import annotations

import pytest
import requests

from conftest import FakeResponse, FakeSession
from youth_registry.api.transport import ApiClient, ApiConfig
from youth_registry.core.exceptions import HttpError, TransportError


def _client(*responses):
    session = FakeSession(responses)
    return ApiClient(ApiConfig(base_url="http://backend.test/"), session=session), session


def test_sends_json_headers_and_drops_empty_params():
    client, session = _client(FakeResponse(200, {"data": []}))

    client.request("/personas", params={"cedula": "123", "nombreCompleto": None, "limit": ""})

    call = session.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "http://backend.test/personas"
    assert call["params"] == {"cedula": "123"}
    assert call["headers"]["Content-Type"] == "application/json"
    assert call["timeout"] is None


def test_empty_body_decodes_to_none():
    client, _ = _client(FakeResponse(204, ""))
    assert client.request("/x", method="POST", json={"a": 1}) is None


def test_error_uses_backend_message_and_keeps_payload():
    body = {"code": "DUPLICATE_KEY", "message": "Ya existe", "errors": [{"field": "cedula"}]}
    client, _ = _client(FakeResponse(409, body, reason="Conflict"))

    with pytest.raises(HttpError) as exc:
        client.request("/personas", method="POST", json={})

    assert str(exc.value) == "Ya existe"
    assert exc.value.status == 409
    assert exc.value.payload == body
    assert exc.value.code == "DUPLICATE_KEY"


def test_error_falls_back_to_status_text():
    client, _ = _client(FakeResponse(500, "", reason="Internal Server Error"))

    with pytest.raises(HttpError) as exc:
        client.request("/personas")

    assert str(exc.value) == "Internal Server Error"
    assert exc.value.payload is None
    assert exc.value.code is None


def test_non_json_error_body_kept_as_text():
    client, _ = _client(FakeResponse(502, "<html>bad gateway</html>", reason="Bad Gateway"))

    with pytest.raises(HttpError) as exc:
        client.request("/personas")

    assert exc.value.payload == "<html>bad gateway</html>"


def test_network_failure_raises_transport_error():
    client, _ = _client(requests.ConnectionError("down"))

    with pytest.raises(TransportError):
        client.request("/personas")


def test_success_with_non_json_body_raises():
    client, _ = _client(FakeResponse(200, "<html>ok</html>"))

    with pytest.raises(HttpError) as exc:
        client.request("/personas")

    assert exc.value.status == 200
    assert exc.value.payload is None
