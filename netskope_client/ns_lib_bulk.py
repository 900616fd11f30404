"""
Interactive lookup-then-delete workflow used by ns_userBulkDelete.py.
Prompts and output are injected so the workflow can be driven without a terminal.
"""

import logging
from .ns_lib_files import export_lists, load_identifiers
from .ns_lib_models import Counters
from .ns_lib_report import RULE, format_summary

CONFIRMATION_TOKEN = "DELETE"

logger = logging.getLogger(__name__)


def lookup(client, csv_file, out=print):
    """Load the identifier file and resolve it; prints the lookup summary."""
    out("")
    out(f"Netskope Tenant: {client.tenant_fqdn}")
    out(f"Processing {csv_file}")
    identifiers = load_identifiers(csv_file)
    out(f"CSV validated: {len(identifiers)} email(s) loaded.")
    duplicates = len(identifiers) - len(set(identifiers))
    if duplicates:
        out(f"Ignoring {duplicates} duplicate email(s); each address is looked up once.")

    out("Querying Netskope user database to match email list...")
    resolution = client.Users.resolve(identifiers)
    out(format_summary(client.tenant_fqdn, Counters.from_results(resolution)))
    return resolution


def run_bulk_delete(client, csv_file, prompt=input, out=print, export_dir='.'):
    """
    Resolve the emails in csv_file and, after typed confirmation, delete the matches.

    Raises:
        InputFileError: the file is missing or has no valid emails
        SearchError: the user lookup failed

    Returns:
        int: process exit code (0 for completed, nothing to delete, or aborted)
    """
    resolution = lookup(client, csv_file, out)

    if not resolution.found:
        out("")
        out("No matching users found. Nothing to delete.")
        return 0

    try:
        answer = prompt("Do you want to export found/not found lists? (y/n): ")
        if answer.strip() in ('y', 'Y'):
            found_path, not_found_path = export_lists(resolution, export_dir)
            out(f"Exported {found_path} and {not_found_path}")

        out(RULE)
        out(f"You are about to delete {len(resolution.found)} user(s).")
        confirmation = prompt(f"Type {CONFIRMATION_TOKEN} to confirm: ")
    except EOFError:
        # stdin closed before the operator answered
        confirmation = None
        out("")

    if confirmation != CONFIRMATION_TOKEN:
        logger.info("Deletion not confirmed, no users deleted")
        out("Aborted.")
        return 0

    def show(outcome):
        out(f"Deleting {outcome.record.matched_identifier}: {'OK' if outcome.ok else 'Error'}")

    report = client.Users.delete_many(resolution.found, on_outcome=show)

    out(format_summary(client.tenant_fqdn, Counters.from_results(resolution, report)))
    out("Completed.")
    return 0
