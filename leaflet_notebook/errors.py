from __future__ import annotations


class LeafletNotebookError(ValueError):
    """Base class for caller errors raised while building or rendering a map."""


class InvalidGeometryError(LeafletNotebookError):
    pass


class MissingOptionValueError(LeafletNotebookError):
    pass


class UnknownOptionValueError(LeafletNotebookError):
    """A recognized option was given a value it cannot use."""
