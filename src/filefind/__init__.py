"""filefind — lazy recursive file and directory search."""

__version__ = "0.1.0"


class FileFindError(Exception):
    """User-facing search error.

    Raised for invalid search options and bad patterns. The CLI prints
    the message to stderr and exits with code 1.
    """
