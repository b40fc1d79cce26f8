"""Exceptions raised for malformed calls into the engine.

Data-quality problems in the records themselves are never raised; they are
reported as issues or orphaned edges.
"""


class LineageError(Exception):
    """Base class for lineage engine errors."""


class GraphInputError(LineageError, TypeError):
    """Raised when graph construction is handed something that is not a collection."""
