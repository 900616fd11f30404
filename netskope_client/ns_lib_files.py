import logging
import os
import re
from .ns_lib_errors import InputFileError

EMAIL_LINE = re.compile(r'^[^@,\s]+@[^@,\s]+$')
FOUND_FILE = 'found_users.csv'
NOT_FOUND_FILE = 'not_found_users.csv'

logger = logging.getLogger(__name__)


def load_identifiers(path):
    """
    Read one email per line from a text/CSV file.

    Blank lines and lines that are not a single token with exactly one '@'
    (no whitespace, no comma) are skipped.

    Raises:
        InputFileError: file missing or unreadable, or no valid emails in it
    """
    if not os.path.isfile(path):
        raise InputFileError(f"CSV file '{path}' not found.")
    try:
        with open(path, 'r', encoding='utf-8-sig') as file:
            lines = file.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise InputFileError(f"Unable to read '{path}': {e}") from e

    identifiers = []
    skipped = 0
    for line in lines:
        line = line.strip()
        if not line:
            continue
        if EMAIL_LINE.match(line):
            identifiers.append(line)
        else:
            skipped += 1
            logger.debug(f"Skipping invalid line: {line!r}")

    if skipped:
        logger.warning(f"Skipped {skipped} invalid line(s) in {path}")
    if not identifiers:
        raise InputFileError(f"No valid email addresses found in {path}")
    return identifiers


def export_lists(resolution, directory='.'):
    """Write found and not-found identifiers, one per line; returns the two paths."""
    found_path = os.path.join(directory, FOUND_FILE)
    not_found_path = os.path.join(directory, NOT_FOUND_FILE)
    for path, values in ((found_path, resolution.found_identifiers), (not_found_path, resolution.not_found)):
        with open(path, 'w', encoding='utf-8') as file:
            file.writelines(f"{value}\n" for value in values)
        logger.info(f"Wrote {len(values)} identifier(s) to {path}")
    return found_path, not_found_path
