"""movelink exception hierarchy.

All public exceptions inherit from MoveLinkError, giving callers a single
base class to catch when they want to handle any movelink-specific failure
without swallowing unrelated errors.

``LinkageError`` itself lives in ``movelink.core.linkage.errors`` because it
carries graph node identities; it still derives from ``MoveLinkError``.
"""


class MoveLinkError(Exception):
    """Base exception for all movelink errors."""


class PackageError(MoveLinkError):
    """Raised when a package cannot answer a query about itself.

    Covers environments missing from a package manifest and other
    inconsistencies in externally loaded package data.
    """


class GraphError(MoveLinkError):
    """Raised when a dependency graph is assembled incorrectly.

    Covers edges that reference unknown node indices and loader results
    that cannot be placed in the graph.
    """


class DescriptionError(MoveLinkError):
    """Raised when a package-graph description file cannot be loaded.

    Covers unreadable files, malformed YAML, and references to packages
    the description does not define.
    """


class DependencyCycleError(GraphError):
    """Raised when the dependency relation of an environment is cyclic.

    Attributes:
        cycle: Node indices forming the cycle, first index repeated at the
            end (e.g. ``[0, 2, 5, 0]``).
    """

    def __init__(self, message: str, cycle: list[int]) -> None:
        super().__init__(message)
        self.cycle = cycle
