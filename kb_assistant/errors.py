"""
Exception types raised by the Knowledge-Base Assistant.

Every error the assistant raises derives from KBError, so callers such as
the CLI can report failures with a single except clause.
"""


class KBError(Exception):
    """Base class for all Knowledge-Base Assistant errors."""


class InvalidQuery(KBError, ValueError):
    """Raised when a recommendation query is blank or not a string."""


class InvalidDocument(KBError, ValueError):
    """Raised when a document cannot be created or updated as requested."""


class DocumentNotFound(KBError, KeyError):
    """Raised when no document has the requested id."""

    def __str__(self):
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""


class StoreError(KBError):
    """Raised when the document store or analytics log cannot be read or written."""
