"""Tests for the Azure and Watson service clients."""

from __future__ import annotations

import base64
import json
import sys
from pathlib import Path

import pytest
import requests

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from taxcat.core.apis import AzureEntityClient, WatsonNLUClient, basic_auth_header  # noqa: E402
from taxcat.core.http_client import HTTPClient  # noqa: E402


class FakeResponse:
    def __init__(self, text: str, status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error", response=self)


class FakeSession:
    """Records POST calls and answers each with a canned response."""

    def __init__(self, response: FakeResponse) -> None:
        self.response = response
        self.calls = []
        self.closed = False

    def post(self, url, data=None, headers=None, timeout=None):
        self.calls.append({"url": url, "data": data, "headers": headers, "timeout": timeout})
        return self.response

    def close(self) -> None:
        self.closed = True


def test_azure_client_sends_single_document():
    session = FakeSession(FakeResponse('{"documents": []}'))
    client = AzureEntityClient("azure-key", http=HTTPClient(session=session))

    body = client.fetch_entities("Henry Ford worked with Toyota")

    assert body == '{"documents": []}'
    assert len(session.calls) == 1
    call = session.calls[0]
    assert call["url"] == "https://westus.api.cognitive.microsoft.com/text/analytics/v2.1/entities"
    assert call["headers"] == {
        "Content-type": "text/json",
        "Ocp-Apim-Subscription-Key": "azure-key",
    }
    assert json.loads(call["data"]) == {
        "documents": [{"id": "1", "language": "en", "text": "Henry Ford worked with Toyota"}]
    }
    assert call["timeout"] is None


def test_azure_client_joins_custom_endpoint():
    session = FakeSession(FakeResponse("{}"))
    client = AzureEntityClient(
        "k",
        endpoint="https://eastus.api.cognitive.microsoft.com/",
        path="/text/analytics/v2.1/entities",
        http=HTTPClient(session=session),
    )
    client.fetch_entities("text")
    assert session.calls[0]["url"] == "https://eastus.api.cognitive.microsoft.com/text/analytics/v2.1/entities"


def test_watson_client_uses_basic_auth_and_feature_limits():
    session = FakeSession(FakeResponse('{"entities": []}'))
    client = WatsonNLUClient("watson-key", http=HTTPClient(session=session))

    raw_text = "<p>Henry Ford</p>"
    body = client.fetch_analysis(raw_text)

    assert body == '{"entities": []}'
    call = session.calls[0]
    assert call["url"] == (
        "https://gateway.watsonplatform.net"
        "/natural-language-understanding/api/v1/analyze?version=2018-11-16"
    )
    assert call["headers"]["Content-type"] == "application/json"
    scheme, token = call["headers"]["Authorization"].split(" ", 1)
    assert scheme == "Basic"
    assert base64.b64decode(token).decode("utf-8") == "apikey:watson-key"
    assert json.loads(call["data"]) == {
        "text": raw_text,
        "features": {
            "entities": {"emotion": False, "sentiment": False, "limit": 50},
            "concepts": {"limit": 8},
        },
    }


def test_basic_auth_header_encoding():
    assert basic_auth_header("apikey", "secret") == "Basic YXBpa2V5OnNlY3JldA=="


def test_http_errors_propagate_without_retry():
    session = FakeSession(FakeResponse('{"error": "unauthorized"}', status_code=401))
    client = AzureEntityClient("bad-key", http=HTTPClient(session=session))

    with pytest.raises(requests.HTTPError):
        client.fetch_entities("some text")

    assert len(session.calls) == 1


def test_http_client_counts_requests_and_applies_timeout():
    session = FakeSession(FakeResponse("{}"))
    with HTTPClient(timeout=7.5, session=session) as http:
        http.post_json("https://example.invalid/a", {"x": 1})
        http.post_json("https://example.invalid/b", {"x": 2}, timeout=1)

    assert http.request_count == 2
    assert [c["timeout"] for c in session.calls] == [7.5, 1]
    assert session.closed
