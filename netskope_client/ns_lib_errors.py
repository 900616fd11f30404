class NetskopeError(Exception):
    """Base class for errors raised by the Netskope client."""


class InputFileError(NetskopeError):
    """The identifier file is missing, unreadable, or holds no valid identifiers."""


class SearchError(NetskopeError):
    """A user search request failed or returned data that cannot be used; no partial resolution is usable."""
