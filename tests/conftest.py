import json

import httpx
import pytest
from fastapi.testclient import TestClient

from mercass.api.auth_client import AuthDelegateClient
from mercass.database.config.config import Settings
from mercass.database.core.commands import Batch, Procedure, QueryResult, Statement, ViewQuery
from mercass.main import create_app

AUTH_URL = "http://auth.test"
CDN = "http://cdn.test/uploads/"


def command_name(command) -> str:
    if isinstance(command, Procedure):
        return command.name
    if isinstance(command, ViewQuery):
        return command.view
    if isinstance(command, Statement):
        return "statement"
    if isinstance(command, Batch):
        return "batch"
    raise TypeError(command)


class FakeExecutor:
    """Records every command and answers with canned results keyed by procedure/view name."""

    def __init__(self):
        self.commands = []
        self.results = {}
        self.failures = {}
        self.run_many_calls = []

    def respond(self, name, *recordsets, rows_affected=()):
        self.results[name] = QueryResult([list(rows) for rows in recordsets], list(rows_affected))

    def fail(self, name, error):
        self.failures[name] = error

    def names(self):
        return [command_name(command) for command in self.commands]

    def last(self, name):
        return [command for command in self.commands if command_name(command) == name][-1]

    async def run(self, command):
        self.commands.append(command)
        name = command_name(command)
        if name in self.failures:
            raise self.failures[name]
        return self.results.get(name, QueryResult())

    async def run_many(self, named, batch=False):
        self.run_many_calls.append((tuple(named), batch))
        data = {}
        for name, command in named.items():
            data[name] = (await self.run(command)).recordset
        return data


class FakeAuthService:
    """In-memory stand-in for the `/auth` and `/check` endpoints."""

    def __init__(self):
        self.sessions = {}
        self.login_answer = {"Auth": "token-1", "UsersId": 7}
        self.calls = []
        self.down = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.down:
            raise httpx.ConnectError("connection refused", request=request)
        payload = json.loads(request.content or b"{}")
        self.calls.append((request.url.path, payload))
        if request.url.path == "/auth":
            return httpx.Response(200, json=self.login_answer)
        session = self.sessions.get(payload.get("Auth"))
        if session is None:
            return httpx.Response(200, content=b"")
        return httpx.Response(200, json=session)


class FakePaymentGateway:
    def __init__(self):
        self.requests = []
        self.answer = {"status": "success", "paymentId": "1001"}

    async def create_payment(self, request):
        self.requests.append(request)
        return self.answer


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        AUTHSERVER=AUTH_URL,
        FE_CDN_LINK=CDN,
        FE_SITE_NAME="Mercass Test",
        UPLOAD_ROOT=str(tmp_path / "uploads"),
        LOG_DIR=str(tmp_path / "logs"),
    )


@pytest.fixture
def executor():
    return FakeExecutor()


@pytest.fixture
def auth_service():
    return FakeAuthService()


@pytest.fixture
def payment_gateway():
    return FakePaymentGateway()


@pytest.fixture
def app(settings, executor, auth_service, payment_gateway):
    http = httpx.AsyncClient(transport=httpx.MockTransport(auth_service.handler))
    return create_app(
        settings,
        executor=executor,
        auth_client=AuthDelegateClient(http, settings.AUTHSERVER),
        payment_gateway=payment_gateway,
    )


@pytest.fixture
def client(app):
    return TestClient(app, follow_redirects=False)


@pytest.fixture
def signed_in(client, auth_service):
    """A client carrying a session the auth service confirms for user 7."""
    auth_service.sessions["token-1"] = {"Auth": "token-1", "UsersId": 7, "UserName": "ada"}
    client.cookies.set("Auth", "token-1")
    return client
