"""Shared fixtures: an in-memory Netskope directory behind a fake requests.request."""

from __future__ import annotations

import json

import pytest
import requests

from netskope_client.ns_lib import netskope_client

TENANT = "example.goskope.com"
SEARCH_URL = f"https://{TENANT}/api/v2/users/getusers"
DELETE_URL = f"https://{TENANT}/api/v2/scim/Users/"


def make_user(username, scim_id=None, emails=None):
    return {
        "accounts": [{"userName": username, "scimId": scim_id if scim_id is not None else f"scim-{username}"}],
        "emails": emails if emails is not None else [username],
    }


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        if self._payload is None:
            return json.loads(self.text)
        return self._payload


class FakeDirectory:
    """Answers search and delete calls the way the tenant API does."""

    def __init__(self, users=None):
        self.users = list(users or [])
        self.calls = []
        self.total_count = None
        self.pages = None
        self.search_error = None
        self.delete_failures = {}

    @property
    def search_calls(self):
        return [call for call in self.calls if call["method"] == "POST"]

    @property
    def delete_calls(self):
        return [call for call in self.calls if call["method"] == "DELETE"]

    def __call__(self, method, url, headers=None, params=None, json=None, timeout=None):
        self.calls.append({"method": method, "url": url, "headers": headers, "json": json, "timeout": timeout})
        if method == "POST" and url == SEARCH_URL:
            return self.search(json)
        if method == "DELETE" and url.startswith(DELETE_URL):
            return self.delete(url[len(DELETE_URL):])
        return FakeResponse(404, {"error": "not found"})

    def search(self, body):
        if self.search_error is not None:
            if isinstance(self.search_error, Exception):
                raise self.search_error
            return self.search_error
        paging = body["query"]["paging"]
        if self.pages is not None:
            index = len(self.search_calls) - 1
            page = self.pages[index] if index < len(self.pages) else []
            return FakeResponse(200, {"data": page, "totalCount": self.total_count})

        emails = body["query"]["filter"]["and"][0]["or"][0]["accounts.userName"]["in"]
        matches = [
            user for user in self.users
            if user["accounts"][0]["userName"] in emails or set(user["emails"]) & set(emails)
        ]
        page = matches[paging["offset"]:paging["offset"] + paging["limit"]]
        total = self.total_count if self.total_count is not None else len(matches)
        return FakeResponse(200, {"data": page, "totalCount": total})

    def delete(self, scim_id):
        failure = self.delete_failures.get(scim_id)
        if isinstance(failure, Exception):
            raise failure
        if failure is not None:
            return FakeResponse(failure, {"detail": "failed"})
        self.users = [user for user in self.users if user["accounts"][0]["scimId"] != scim_id]
        return FakeResponse(204, None, text="")


@pytest.fixture
def directory(monkeypatch):
    fake = FakeDirectory()
    monkeypatch.setattr(requests, "request", fake)
    return fake


@pytest.fixture
def client(directory):
    return netskope_client(TENANT, "secret-token")


@pytest.fixture
def emails_file(tmp_path):
    def write(*lines):
        path = tmp_path / "users.csv"
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return str(path)
    return write
