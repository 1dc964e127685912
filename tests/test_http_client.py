import asyncio

import httpx
import pytest

from request_review.exceptions import BackendError
from request_review.utils.http_client import BackendClient

from .conftest import BASE_URL


def call(client, method, *args):
    async def _run():
        try:
            return await getattr(client, method)(*args)
        finally:
            await client.aclose()
    return asyncio.run(_run())


def test_joins_relative_path_onto_base_url():
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200, json={"requests": []})

    client = BackendClient(BASE_URL + "/", transport=httpx.MockTransport(handler))
    assert call(client, "get_json", "/user/register_requests") == {"requests": []}
    assert seen == ["http://backend.test/docs-web/api/user/register_requests"]


def test_sends_auth_cookie():
    seen = []

    def handler(request):
        seen.append(request.headers.get("cookie"))
        return httpx.Response(200, json={})

    client = BackendClient(BASE_URL, auth_token="secret", transport=httpx.MockTransport(handler))
    call(client, "get_json", "user/register_requests")
    assert seen == ["auth_token=secret"]


def test_no_cookie_without_token():
    seen = []

    def handler(request):
        seen.append(request.headers.get("cookie"))
        return httpx.Response(200, json={})

    client = BackendClient(BASE_URL, transport=httpx.MockTransport(handler))
    call(client, "get_json", "user/register_requests")
    assert seen == [None]


def test_post_json_sends_body():
    seen = []

    def handler(request):
        seen.append((request.method, request.headers["content-type"], request.content))
        return httpx.Response(200, json={"status": "ok"})

    client = BackendClient(BASE_URL, transport=httpx.MockTransport(handler))
    result = call(client, "post_json", "user/process_request", {"username": "a", "approve": True})
    assert result == {"status": "ok"}
    method, content_type, content = seen[0]
    assert method == "POST"
    assert content_type == "application/json"
    assert b'"approve"' in content


@pytest.mark.parametrize("status", [400, 403, 500])
def test_status_errors_keep_upstream_code(status):
    client = BackendClient(BASE_URL, transport=httpx.MockTransport(lambda r: httpx.Response(status, text="nope")))
    with pytest.raises(BackendError) as exc_info:
        call(client, "post_json", "user/process_request", {"username": "a", "approve": True})
    assert exc_info.value.status_code == status
    assert exc_info.value.detail == "nope"


def test_connection_error_maps_to_503():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = BackendClient(BASE_URL, transport=httpx.MockTransport(handler))
    with pytest.raises(BackendError) as exc_info:
        call(client, "get_json", "user/register_requests")
    assert exc_info.value.status_code == 503


def test_timeout_maps_to_503():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    client = BackendClient(BASE_URL, transport=httpx.MockTransport(handler))
    with pytest.raises(BackendError) as exc_info:
        call(client, "get_json", "user/register_requests")
    assert exc_info.value.status_code == 503


def test_invalid_json_on_read_is_an_error():
    client = BackendClient(BASE_URL, transport=httpx.MockTransport(lambda r: httpx.Response(200, text="<html>")))
    with pytest.raises(BackendError) as exc_info:
        call(client, "get_json", "user/register_requests")
    assert exc_info.value.status_code == 502


def test_acknowledgement_body_is_optional():
    client = BackendClient(BASE_URL, transport=httpx.MockTransport(lambda r: httpx.Response(200, text="OK")))
    assert call(client, "post_form", "user/register_request", {"username": "a", "email": "a@x"}) is None

    client = BackendClient(BASE_URL, transport=httpx.MockTransport(lambda r: httpx.Response(204)))
    assert call(client, "post_json", "user/process_request", {"username": "a", "approve": False}) is None


def test_client_is_reused_and_closed():
    client = BackendClient(BASE_URL, transport=httpx.MockTransport(lambda r: httpx.Response(200, json={})))

    async def _run():
        first = client._get_http_client()
        assert client._get_http_client() is first
        await client.aclose()
        assert client._http_client is None
        # Повторное закрытие безопасно
        await client.aclose()

    asyncio.run(_run())
