import asyncio

import httpx
import pytest

from posts_service.clients.users_client import UsersClient, UserServiceUnavailable

USER_ID = "65a1f0c2e4b0a1b2c3d4e5f6"


def client_for(handler, timeout: float = 5.0) -> UsersClient:
    return UsersClient(base_url="http://users.test", timeout=timeout, transport=httpx.MockTransport(handler))


def check(users_client: UsersClient, user_id: str = USER_ID) -> bool:
    return asyncio.run(users_client.user_exists(user_id))


def test_existing_user():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": USER_ID, "exists": True})

    assert check(client_for(handler)) is True
    assert seen[0].method == "GET"
    assert str(seen[0].url) == f"http://users.test/users/exists/{USER_ID}"


def test_missing_user():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"id": USER_ID, "exists": False})

    assert check(client_for(handler)) is False


def test_base_url_trailing_slash_and_quoting():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.raw_path)
        return httpx.Response(400, json={"detail": "bad id"})

    users_client = UsersClient(base_url="http://users.test/", transport=httpx.MockTransport(handler))
    assert check(users_client, "a/b") is False
    assert seen == [b"/users/exists/a%2Fb"]


def test_malformed_identifier_means_no_such_user():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"detail": "'abc' is not a valid ObjectID"})

    assert check(client_for(handler), "abc") is False


def test_connection_error_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    with pytest.raises(UserServiceUnavailable) as excinfo:
        check(client_for(handler))
    assert excinfo.value.user_id == USER_ID
    assert "Connection refused" in excinfo.value.reason


def test_timeout_is_unavailable():
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(1)
        return httpx.Response(200, json={"id": USER_ID, "exists": True})

    with pytest.raises(UserServiceUnavailable) as excinfo:
        check(client_for(handler, timeout=0.05))
    assert "no reply" in excinfo.value.reason


@pytest.mark.parametrize("status_code", [404, 500, 503])
def test_unexpected_status_is_unavailable(status_code):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json={"detail": "boom"})

    with pytest.raises(UserServiceUnavailable):
        check(client_for(handler))


@pytest.mark.parametrize(
    "body",
    [
        b"not json",
        b'{"id": "65a1f0c2e4b0a1b2c3d4e5f6"}',
        b'{"id": "65a1f0c2e4b0a1b2c3d4e5f6", "exists": "maybe"}',
        b'{"id": "000000000000000000000000", "exists": true}',
    ],
)
def test_undecodable_reply_is_unavailable(body):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=body, headers={"Content-Type": "application/json"})

    with pytest.raises(UserServiceUnavailable):
        check(client_for(handler))
