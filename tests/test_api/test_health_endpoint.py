"""Tests for health check endpoint."""

import pytest
import json
from http.server import BaseHTTPRequestHandler

from api.health import handler
from tests.utils.helpers import call_handler


@pytest.mark.unit
def test_health_handler_class():
    """Test that handler is a BaseHTTPRequestHandler subclass."""
    assert issubclass(handler, BaseHTTPRequestHandler)


@pytest.mark.unit
def test_health_get_request(default_store):
    """Test GET request to health endpoint."""
    default_store.write("dailyTasks", [])

    status, headers, body = call_handler(handler, "GET", "/api/health")

    assert status == 200
    assert headers["content-type"] == "application/json"
    assert json.loads(body) == {
        "status": "ok",
        "service": "equipcare-hub",
        "storage": "MemoryStorage",
        "collections": 1,
    }


@pytest.mark.unit
def test_health_post_request(default_store):
    """Test POST request to health endpoint."""
    status, _, body = call_handler(handler, "POST", "/api/health")

    assert status == 200
    assert json.loads(body)["status"] == "ok"
