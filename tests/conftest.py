"""Shared fixtures: a fake requests.Session returning canned responses."""

from __future__ import annotations

import json
from typing import Any, Iterable, Optional
from unittest import mock

import pytest
import requests

from eftadmin.services import EFTConnection

HOST = "https://eft.example.com:4450"


def make_response(
    status: int = 200, payload: Any = None, *, text: Optional[str] = None
) -> requests.Response:
    """Build a real requests.Response with the given status and body."""
    response = requests.Response()
    response.status_code = status
    if text is None:
        text = json.dumps(payload) if payload is not None else ""
    response._content = text.encode("utf-8")
    response._content_consumed = True
    response.encoding = "utf-8"
    return response


def auth_response(token: str = "tok-1") -> requests.Response:
    return make_response(200, {"authToken": token})


def make_session(responses: Iterable[Any]) -> mock.Mock:
    """Mock session whose ``request`` yields ``responses`` (or raises them) in order."""
    session = mock.Mock(spec=requests.Session)
    session.request.side_effect = list(responses)
    return session


def sent_json(call: Any) -> Any:
    """Decode the JSON body of a recorded ``session.request`` call."""
    data = call.kwargs.get("data")
    return json.loads(data) if data is not None else None


def make_connection(*responses: Any, token: str = "tok-1", **kwargs: Any) -> EFTConnection:
    session = make_session([auth_response(token), *responses])
    return EFTConnection(HOST, "admin", "s3cret", session=session, **kwargs)


@pytest.fixture
def session_factory():
    return make_session


@pytest.fixture
def response_factory():
    return make_response


@pytest.fixture
def connection_factory():
    return make_connection


@pytest.fixture
def body_of():
    return sent_json
