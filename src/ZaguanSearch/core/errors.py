"""Error taxonomy shared across ZaguanSearch.

Fatal errors (`ModelLoadError`, `MalformedInputFileError`) propagate to the CLI
boundary and abort the run. `ClauseBuildError` is scoped to one information
need and `InvalidPageCommand` to one interactive prompt.
"""

from __future__ import annotations


class ZaguanSearchError(Exception):
    """Base class for all ZaguanSearch errors."""


class ModelLoadError(ZaguanSearchError):
    """A linguistic model resource could not be loaded."""


class ClauseBuildError(ZaguanSearchError):
    """A field literal cannot be expressed in the backend query grammar."""

    def __init__(self, field: str, literal: object, reason: str) -> None:
        super().__init__(f"cannot build clause {field}:{literal!r}: {reason}")
        self.field = field
        self.literal = literal
        self.reason = reason


class MalformedInputFileError(ZaguanSearchError):
    """The information-need file is not well formed or misses elements."""


class InvalidPageCommand(ZaguanSearchError):
    """An interactive paging command was not recognized."""

    def __init__(self, command: str) -> None:
        super().__init__(f"Unrecognized command: {command!r}")
        self.command = command
