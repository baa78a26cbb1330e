"""
Shared test fixtures.

The sync client is given a recording stand-in for requests.Session; the async
client is given an httpx.MockTransport. Both record what would have been sent.
"""

import json
import os
import sys
from types import SimpleNamespace
from typing import Any, List

import httpx
import pytest
import requests
from requests.cookies import RequestsCookieJar

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from mfws_client import AsyncMFWSClient, MFWSClient

BASE_URL = "http://localhost"


def make_response(body: Any = None, status_code: int = 200) -> requests.Response:
    """Build a requests.Response carrying a JSON body."""
    response = requests.Response()
    response.status_code = status_code
    response._content = b"" if body is None else json.dumps(body).encode("utf-8")
    response.encoding = "utf-8"
    return response


class RecordingSession:
    """Stands in for requests.Session: records requests, replays queued responses."""

    def __init__(self):
        self.calls: List[SimpleNamespace] = []
        self.responses: List[requests.Response] = []
        self.cookies = RequestsCookieJar()
        self.closed = False

    def queue(self, body: Any = None, status_code: int = 200) -> None:
        self.responses.append(make_response(body, status_code))

    def request(self, method, url, json=None, headers=None, timeout=None):
        self.calls.append(
            SimpleNamespace(
                method=method,
                url=url,
                resource=url[len(BASE_URL):],
                json=json,
                headers=headers or {},
                timeout=timeout,
            )
        )
        if self.responses:
            return self.responses.pop(0)
        return make_response()

    @property
    def last(self) -> SimpleNamespace:
        return self.calls[-1]

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def session() -> RecordingSession:
    return RecordingSession()


@pytest.fixture
def client(session) -> MFWSClient:
    return MFWSClient(BASE_URL, session=session)


class MockServer:
    """Canned responses for the async client, served through httpx.MockTransport."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.responses: List[httpx.Response] = []

    def queue(self, body: Any = None, status_code: int = 200) -> None:
        if body is None:
            self.responses.append(httpx.Response(status_code))
        else:
            self.responses.append(httpx.Response(status_code, json=body))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.responses:
            return self.responses.pop(0)
        return httpx.Response(200)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def client(self) -> AsyncMFWSClient:
        transport = httpx.MockTransport(self.handler)
        return AsyncMFWSClient(BASE_URL, client=httpx.AsyncClient(transport=transport))


@pytest.fixture
def server() -> MockServer:
    return MockServer()
