"""Tests for app.ai.client — Workers AI REST client over httpx.MockTransport."""

import json

import httpx
import pytest

from app.ai.client import WorkersAIClient, WorkersAIError
from app.core.config import settings


def _client(handler) -> WorkersAIClient:
    return WorkersAIClient(
        account_id="acct",
        api_token="cf-token",
        base_url="https://ai.test/client/v4/",
        transport=httpx.MockTransport(handler),
    )


class TestRun:
    def test_unwraps_result_and_sends_auth(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"result": {"image": "aGk="}, "success": True})

        result = _client(handler).run("@cf/leonardo/lucid-origin", {"prompt": "p"})
        assert result == {"image": "aGk="}
        assert seen["url"] == "https://ai.test/client/v4/accounts/acct/ai/run/@cf/leonardo/lucid-origin"
        assert seen["auth"] == "Bearer cf-token"
        assert seen["body"] == {"prompt": "p"}

    def test_unenveloped_object_returned_as_is(self):
        client = _client(lambda r: httpx.Response(200, json={"output": []}))
        assert client.run("m", {}) == {"output": []}

    def test_http_error_raises(self):
        client = _client(lambda r: httpx.Response(500, text="boom"))
        with pytest.raises(WorkersAIError) as exc:
            client.run("m", {})
        assert exc.value.status_code == 500

    def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(WorkersAIError):
            _client(handler).run("m", {})

    def test_non_json_raises(self):
        client = _client(lambda r: httpx.Response(200, content=b"\x89PNG"))
        with pytest.raises(WorkersAIError):
            client.run("m", {})

    def test_missing_credentials_raise_before_request(self, monkeypatch):
        monkeypatch.setattr(settings, "CLOUDFLARE_ACCOUNT_ID", None)
        monkeypatch.setattr(settings, "CLOUDFLARE_API_TOKEN", None)

        def handler(request):
            raise AssertionError("no request expected")

        client = WorkersAIClient(transport=httpx.MockTransport(handler))
        with pytest.raises(WorkersAIError):
            client.run("m", {})


class TestModelHelpers:
    def test_generate_text_payload(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"result": {"output": []}})

        _client(handler).generate_text("be brief", "Vienna")
        assert seen["path"].endswith(settings.TEXT_MODEL)
        assert seen["body"] == {"input": "Vienna", "instructions": "be brief"}

    def test_generate_image_uses_configured_steps(self):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"result": {"image": ""}})

        _client(handler).generate_image("a harbour")
        assert seen["body"] == {"prompt": "a harbour", "num_steps": settings.IMAGE_NUM_STEPS}
