"""Error taxonomy for graph loading, resolution and execution."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class GraphRunError(Exception):
    """Base class for every failure that aborts a graph run."""


class MalformedGraph(GraphRunError):
    """Graph description could not be decoded into nodes."""

    def __init__(self, reason: str, path: Path | None = None) -> None:
        self.reason = reason
        self.path = path
        where = f" ({path})" if path is not None else ""
        super().__init__(f"Malformed graph{where}: {reason}")


class DuplicateNode(GraphRunError):
    """Two nodes share the same id."""

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f"Duplicate node id detected: {node_id}")


class UnknownDependency(GraphRunError):
    """A dependsOn entry names a node that does not exist."""

    def __init__(self, node_id: str, dependency: str) -> None:
        self.node_id = node_id
        self.dependency = dependency
        super().__init__(f"Node {node_id} depends on unknown node {dependency}")


class CyclicGraph(GraphRunError):
    """Dependency relation contains at least one cycle."""

    def __init__(self, members: Sequence[str]) -> None:
        self.members = tuple(members)
        super().__init__(
            "Graph contains a cycle; unresolved nodes: " + ", ".join(self.members)
        )


class InvariantViolation(GraphRunError):
    """Internal consistency check failed. Unreachable while the resolver is correct."""


class ResolverFault(InvariantViolation):
    """In-degree bookkeeping went negative during ordering."""

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f"Negative in-degree encountered for {node_id}")


class MissingUpstreamState(InvariantViolation):
    """A dependency was expected to have run already but has no record."""

    def __init__(self, node_id: str, dependency: str) -> None:
        self.node_id = node_id
        self.dependency = dependency
        super().__init__(f"Missing state for dependency {dependency} of node {node_id}")


class ModuleLoadFailure(GraphRunError):
    """Sandboxed module could not be read, compiled or instantiated."""

    def __init__(self, node_id: str, path: Path, reason: str) -> None:
        self.node_id = node_id
        self.path = path
        self.reason = reason
        super().__init__(f"Node {node_id} failed to load module {path}: {reason}")


class MissingEntryPoint(GraphRunError):
    """Module does not export a callable (i32) -> i32 entry point."""

    def __init__(self, node_id: str, entry_point: str, detail: str = "") -> None:
        self.node_id = node_id
        self.entry_point = entry_point
        message = f"Node {node_id} does not export a {entry_point} function"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message + ".")


class ModuleTrap(GraphRunError):
    """Module trapped while running its entry point."""

    def __init__(self, node_id: str, reason: str) -> None:
        self.node_id = node_id
        self.reason = reason
        super().__init__(f"Node {node_id} trapped during execution: {reason}")


class InputOutOfRange(GraphRunError):
    """Resolved input does not fit the i32 parameter of the entry point."""

    def __init__(self, node_id: str, value: int) -> None:
        self.node_id = node_id
        self.value = value
        super().__init__(f"Input {value} for node {node_id} is outside the i32 range.")
