"""
Shared fixtures for Bitwarden Serve SDK tests
"""

from typing import List

import httpx
import pytest

from bitwarden_serve_sdk import BitwardenClient

BASE_URL = "http://localhost"


def item_payload(**overrides):
    """Item JSON as bw serve returns it."""
    data = {
        "object": "item",
        "id": "5b2f3c1e-0000-4000-8000-000000000001",
        "creationDate": "2023-01-01T00:00:00Z",
        "revisionDate": "2023-02-01T12:30:00.000Z",
        "deletedDate": None,
        "organizationId": None,
        "collectionId": None,
        "folderId": None,
        "type": 1,
        "name": "example.com",
        "notes": None,
        "favorite": False,
        "fields": [],
        "login": {
            "uris": [{"match": None, "uri": "https://example.com/login"}],
            "username": "alice",
            "password": "hunter2",
            "totp": None,
        },
        "reprompt": 0,
    }
    data.update(overrides)
    return data


def envelope(item):
    return {"success": True, "data": item}


class Recorder:
    """Mock transport handler that records requests and replays responses."""

    def __init__(self, *responses):
        self.responses: List = list(responses)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(request)
        return response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def make_client():
    clients = []

    def factory(*responses, **kwargs):
        recorder = Recorder(*responses)
        client = BitwardenClient(BASE_URL, transport=httpx.MockTransport(recorder), **kwargs)
        clients.append(client)
        return client, recorder

    yield factory

    for client in clients:
        client.close()
