"""Test configuration helpers."""

from __future__ import annotations

import base64
import json
from typing import Any

import pytest
import requests

from retrodiffusion.client import RetroDiffusionClient

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-bytes"
PNG_B64 = base64.b64encode(PNG_BYTES).decode()

INFERENCE_BODY = {
    "created_at": 1733425519,
    "credit_cost": 1,
    "remaining_credits": 999,
    "base64_images": [PNG_B64],
    "model": "rd_fast",
}


def make_response(status: int, body: Any = None, reason: str = "", raw: bytes | None = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.reason = reason
    if raw is not None:
        response._content = raw
    elif body is not None:
        response._content = json.dumps(body).encode()
    else:
        response._content = b""
    return response


class Recorder:
    """Stands in for `requests.request` and remembers every call."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.response = make_response(200, INFERENCE_BODY)
        self.error: Exception | None = None

    def __call__(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def last(self) -> dict[str, Any]:
        return self.calls[-1]


@pytest.fixture(autouse=True)
def clear_key_env(monkeypatch, tmp_path):
    # setenv first so teardown also removes keys a `.env` load adds mid-test
    for name in ("RD_TOKEN", "RD_API_KEY"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def http(monkeypatch) -> Recorder:
    recorder = Recorder()
    monkeypatch.setattr("retrodiffusion.transport.requests.request", recorder)
    return recorder


@pytest.fixture
def client(http) -> RetroDiffusionClient:
    return RetroDiffusionClient(api_key="test-key")
