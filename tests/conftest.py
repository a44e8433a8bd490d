"""Shared fixtures: a scripted requests session and an app wired to it."""

import json

import pytest
import requests
from fastapi.testclient import TestClient

from servicehub.auth import create_session_token
from servicehub.directory.client import DirectoryClient
from servicehub.main import app, get_client
from servicehub.models import SessionUser

API_BASE = "http://api.test/api"


def make_response(status_code: int, body=None, text: str = "") -> requests.Response:
    resp = requests.Response()
    resp.status_code = status_code
    resp.encoding = "utf-8"
    if body is not None:
        resp._content = json.dumps(body).encode()
        resp.headers["Content-Type"] = "application/json"
    else:
        resp._content = text.encode()
        resp.headers["Content-Type"] = "text/html"
    return resp


class FakeHttpSession:
    """Stands in for requests.Session; answers from a (method, path) table."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, method: str, path: str, result):
        self.routes[(method, path)] = result

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        path = url[len(API_BASE):]
        result = self.routes.get((method, path))
        if result is None:
            return make_response(404)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def http():
    return FakeHttpSession()


@pytest.fixture
def directory(http):
    return DirectoryClient(base_url=API_BASE, timeout=1, session=http)


@pytest.fixture
def client(directory):
    app.dependency_overrides[get_client] = lambda: directory
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def customer_cookie():
    return create_session_token(SessionUser(username="dana", role="ROLE_CUSTOMER", token="tok-123"))


@pytest.fixture
def alice_profile():
    return {
        "username": "alice",
        "providerName": "Alice",
        "rating": 4.5,
        "location": "Dhaka",
        "mobileNumber": "01700000000",
        "email": "alice@example.com",
        "experience": 6,
        "noOfBookings": 12,
        "profilePicture": None,
        "service": {"serviceId": "S-7", "serviceName": "Plumbing", "noOfProviders": 3},
    }
