import asyncio
import json

import httpx
import pytest

from mercass.api.auth_client import AuthDelegateClient
from mercass.api.device import build_login_payload
from mercass.exceptions import AuthServiceError


def make_client(handler):
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return AuthDelegateClient(http, "http://auth.test/")


def answer(body):
    def handler(request):
        if body is None:
            return httpx.Response(200, content=b"")
        return httpx.Response(200, json=body)
    return handler


def test_missing_token_skips_the_service():
    def handler(request):
        raise AssertionError("service must not be called")

    assert asyncio.run(make_client(handler).check(None)) is None


def test_empty_body_is_unauthenticated():
    assert asyncio.run(make_client(answer(None)).check("abc")) is None


def test_error_coded_body_is_unauthenticated():
    body = {"ErrCode": 4, "ErrMessage": "expired"}
    assert asyncio.run(make_client(answer(body)).check("abc")) is None


def test_token_mismatch_is_unauthenticated():
    body = {"Auth": "someone-else", "UsersId": 3}
    assert asyncio.run(make_client(answer(body)).check("abc")) is None


def test_matching_session_is_returned():
    seen = []

    def handler(request):
        seen.append((request.url.path, json.loads(request.content)))
        return httpx.Response(200, json={"Auth": "abc", "UsersId": 3, "UserName": "ada"})

    session = asyncio.run(make_client(handler).check("abc"))

    assert session.UsersId == 3
    assert session.UserName == "ada"
    assert seen == [("/check", {"Auth": "abc"})]


def test_transport_failure_raises():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(AuthServiceError) as info:
        asyncio.run(make_client(handler).check("abc"))

    assert info.value.kind == "auth_service"


def test_server_error_status_raises():
    def handler(request):
        return httpx.Response(502, text="bad gateway")

    with pytest.raises(AuthServiceError):
        asyncio.run(make_client(handler).check("abc"))


def test_authenticate_posts_the_fingerprint():
    posted = []

    def handler(request):
        posted.append(json.loads(request.content))
        return httpx.Response(200, json={"ErrCode": 3, "ErrMessage": "invalid credentials"})

    payload = build_login_payload("ada", "secret", "Mozilla/5.0", "10.0.0.1")
    response = asyncio.run(make_client(handler).authenticate(payload))

    assert response.is_error
    assert response.ErrMessage == "invalid credentials"
    assert posted[0]["UserName"] == "ada"
    assert posted[0]["ValidHash"] == payload.ValidHash


def test_authenticate_with_empty_body_raises():
    payload = build_login_payload("ada", "secret", "", "")

    with pytest.raises(AuthServiceError):
        asyncio.run(make_client(answer(None)).authenticate(payload))
