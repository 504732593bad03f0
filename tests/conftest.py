"""Shared fixtures for collector tests."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from models import CollectorConfig


def make_response(status_code: int = 200, content=b"", reason: str = "OK", url: str = "") -> requests.Response:
    """Build a real requests.Response so raise_for_status behaves normally."""
    if isinstance(content, (dict, list)):
        content = json.dumps(content).encode()
    elif isinstance(content, str):
        content = content.encode()

    response = requests.Response()
    response.status_code = status_code
    response._content = content
    response.reason = reason
    response.url = url
    return response


@pytest.fixture
def config():
    return CollectorConfig()


@pytest.fixture
def session():
    """A stand-in session; set ``session.get.side_effect`` per test."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def no_sleep():
    return MagicMock()
