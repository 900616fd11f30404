import logging
from .ns_lib_errors import SearchError
from .ns_lib_models import (
    DeletionOutcome,
    DeletionReport,
    DeletionStatus,
    DirectoryRecord,
    ResolutionResult,
    match_key,
)

PAGE_SIZE = 50

#####################################################################################################################################################
class Users:
    def __init__(self, client):
        self.client = client
        self.logger = logging.getLogger(__name__)

    def __search_request__(self, emails, offset, limit):
        return {
            "query": {
                "paging": {"offset": offset, "limit": limit},
                "filter": {
                    "and": [
                        {
                            "or": [
                                {"accounts.userName": {"in": emails}},
                                {"emails": {"in": emails}},
                            ]
                        },
                        {"accounts.deleted": {"eq": False}},
                    ]
                },
                "projection": ["accounts.userName", "accounts.scimId", "emails"],
            }
        }

    def __to_record__(self, user):
        """Build a DirectoryRecord from the first account of a search hit, or None if it is unusable."""
        accounts = (user.get('accounts') or []) if isinstance(user, dict) else []
        account = accounts[0] if accounts and isinstance(accounts[0], dict) else {}
        username = account.get('userName')
        scim_id = account.get('scimId')
        if not username or not scim_id:
            self.client.__verbose_print__(f"Skipping search hit without userName/scimId: {user}")
            return None
        return DirectoryRecord(str(username), str(scim_id), tuple(user.get('emails') or ()))

    def iter_pages(self, emails, page_size=PAGE_SIZE):
        """
        Page through every active user matching any of the emails.

        The whole email list is sent as the filter on every request; paging walks the
        matching users. Iteration stops on an empty page or once the offset reaches
        the reported totalCount.

        Args:
            emails (list): Identifiers matched against accounts.userName and emails
            page_size (int): Users requested per page

        Yields:
            list: DirectoryRecords of one page, in API order, malformed hits dropped

        Raises:
            SearchError: when any page request fails or a page is not a data list with an integer totalCount
        """
        url = f"{self.client.server_url}/api/v2/users/getusers"
        emails = list(emails)
        offset = 0
        while True:
            data = self.client.__api_search__(url, self.__search_request__(emails, offset, page_size))
            users = data.get('data') or []
            if not isinstance(users, list):
                raise SearchError("User search returned an unexpected payload")
            if not users:
                break
            total = data.get('totalCount') or 0
            if not isinstance(total, int) or isinstance(total, bool):
                raise SearchError("User search returned an unexpected payload")

            records = [record for record in map(self.__to_record__, users) if record]
            yield records

            offset += page_size
            if offset >= total:
                break

    def resolve(self, emails, page_size=PAGE_SIZE):
        """
        Map requested emails to directory records.

        Args:
            emails (list): Identifiers to look up; repeats are collapsed to the first occurrence

        Returns:
            ResolutionResult: found records in API order and not-found identifiers in input order
        """
        emails = list(emails)
        requested = list(dict.fromkeys(emails))
        if len(requested) != len(emails):
            self.logger.info(f"Ignoring {len(emails) - len(requested)} duplicate identifier(s)")

        by_key = {match_key(e): e for e in requested}
        found = []
        matched = set()
        for page in self.iter_pages(requested, page_size):
            for record in page:
                identifier = by_key.get(match_key(record.matched_identifier))
                if identifier is None:
                    self.logger.warning(
                        f"{record.matched_identifier} ({record.record_id}) matched by email only - not a deletion target"
                    )
                elif identifier in matched:
                    self.logger.warning(f"Extra directory record {record.record_id} for {identifier} ignored")
                else:
                    matched.add(identifier)
                    found.append(record)

        not_found = [e for e in requested if e not in matched]
        self.logger.info(f"Resolved {len(found)} of {len(requested)} identifier(s)")
        return ResolutionResult(requested, found, not_found)

    def delete(self, scim_id):
        """
        Delete a user through the SCIM Users endpoint.

        Args:
            scim_id (str): SCIM id of the user

        Returns:
            tuple: (ok, status_code, error)
        """
        url = f"{self.client.server_url}/api/v2/scim/Users/{scim_id}"
        headers = dict(self.client.headers, accept='*/*')
        response = self.client.__api_call__(url=url, method="DELETE", headers=headers)
        if response is not None:
            return True, response.status_code, ""
        return False, self.client.last_status_code, self.client.last_error or "unknown error"

    def delete_many(self, records, on_outcome=None):
        """
        Delete each record in order, one request at a time.

        Only call this after the operator typed the DELETE confirmation; the
        executor itself does not prompt. A failed delete is recorded and the
        next record is still attempted; nothing is retried or rolled back.

        Args:
            records (list): DirectoryRecords from ResolutionResult.found
            on_outcome (callable, optional): called with each DeletionOutcome as it is produced

        Returns:
            DeletionReport: one outcome per attempted record, in record order
        """
        report = DeletionReport()
        for record in records:
            ok, status_code, error = self.delete(record.record_id)
            if ok:
                outcome = DeletionOutcome(record, DeletionStatus.DELETED, status_code)
                self.logger.info(f"Deleted {record.matched_identifier} ({record.record_id})")
            else:
                outcome = DeletionOutcome(record, DeletionStatus.FAILED, status_code, error)
                self.logger.error(f"Failed to delete {record.matched_identifier} ({record.record_id}): {error}")
            report.outcomes.append(outcome)
            if on_outcome:
                on_outcome(outcome)
        return report
