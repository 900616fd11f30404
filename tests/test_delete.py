"""Tests for the sequential SCIM delete loop."""

from __future__ import annotations

import requests

from netskope_client.ns_lib_models import DeletionStatus, DirectoryRecord
from tests.conftest import DELETE_URL, make_user


def records(*names):
    return [DirectoryRecord(name, f"scim-{name}", (name,)) for name in names]


class TestDelete:
    def test_delete_uses_scim_endpoint(self, client, directory) -> None:
        ok, status_code, error = client.Users.delete("abc-123")
        call = directory.delete_calls[0]
        assert call["url"] == f"{DELETE_URL}abc-123"
        assert call["headers"]["accept"] == "*/*"
        assert call["headers"]["Authorization"] == "Bearer secret-token"
        assert (ok, status_code, error) == (True, 204, "")

    def test_delete_failure_reports_status(self, client, directory) -> None:
        directory.delete_failures["abc-123"] = 404
        assert client.Users.delete("abc-123") == (False, 404, "HTTP 404")


class TestDeleteMany:
    def test_failure_does_not_stop_the_batch(self, client, directory) -> None:
        directory.delete_failures["scim-b@x.com"] = 500

        report = client.Users.delete_many(records("a@x.com", "b@x.com", "c@x.com"))

        assert [c["url"] for c in directory.delete_calls] == [
            f"{DELETE_URL}scim-a@x.com",
            f"{DELETE_URL}scim-b@x.com",
            f"{DELETE_URL}scim-c@x.com",
        ]
        assert [o.status for o in report.outcomes] == [
            DeletionStatus.DELETED,
            DeletionStatus.FAILED,
            DeletionStatus.DELETED,
        ]
        assert report.deleted_count == 2
        assert report.error_count == 1
        assert report.failed[0].status_code == 500

    def test_timeout_counts_as_failure(self, client, directory) -> None:
        directory.delete_failures["scim-a@x.com"] = requests.Timeout("read timed out")

        report = client.Users.delete_many(records("a@x.com", "b@x.com"))

        assert report.deleted_count == 1
        assert report.error_count == 1
        assert report.failed[0].status_code is None
        assert "timed out" in report.failed[0].error

    def test_no_retry_for_failed_record(self, client, directory) -> None:
        directory.delete_failures["scim-a@x.com"] = 503
        client.Users.delete_many(records("a@x.com"))
        assert len(directory.delete_calls) == 1

    def test_outcomes_reported_as_they_happen(self, client, directory) -> None:
        seen = []

        def on_outcome(outcome):
            seen.append((outcome.record.matched_identifier, len(directory.delete_calls)))

        client.Users.delete_many(records("a@x.com", "b@x.com"), on_outcome=on_outcome)

        assert seen == [("a@x.com", 1), ("b@x.com", 2)]

    def test_counts_cover_every_found_record(self, client, directory) -> None:
        directory.users = [make_user(f"u{i}@x.com") for i in range(7)]
        directory.delete_failures = {"scim-u1@x.com": 500, "scim-u4@x.com": 403}
        resolution = client.Users.resolve([f"u{i}@x.com" for i in range(9)])

        report = client.Users.delete_many(resolution.found)

        assert report.deleted_count + report.error_count == len(resolution.found)
        assert (report.deleted_count, report.error_count) == (5, 2)

    def test_empty_list_issues_no_calls(self, client, directory) -> None:
        report = client.Users.delete_many([])
        assert report.outcomes == []
        assert directory.delete_calls == []
