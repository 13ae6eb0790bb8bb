"""
Pytest configuration and shared fixtures.

1. Puts the project root on sys.path so `core` and `tools` import directly
2. Provides a fake randomuser.me upstream built on httpx.MockTransport
"""

import json
import sys
from pathlib import Path
from typing import Optional

import httpx
import pytest

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


SAMPLE_PAYLOAD = {
    "results": [
        {
            "gender": "female",
            "name": {"title": "Mme", "first": "Zoé", "last": "Martin"},
            "email": "zoe.martin@example.com",
            "nat": "FR",
        }
    ],
    "info": {"seed": "abc123", "results": 1, "page": 1, "version": "1.4"},
}


class FakeUpstream:
    """Stands in for randomuser.me and records every request it receives."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: bytes = json.dumps(SAMPLE_PAYLOAD).encode("utf-8")
        self.error: Optional[type[httpx.RequestError]] = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error("simulated failure", request=request)
        return httpx.Response(
            self.status_code,
            content=self.body,
            headers={"content-type": "application/json"},
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_params(self) -> httpx.QueryParams:
        return self.requests[-1].url.params


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def sample_payload() -> dict:
    return SAMPLE_PAYLOAD
