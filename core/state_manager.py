"""Execution state accumulated over one graph run."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ExecutionRecord:
    """Result of running one node."""

    input: int
    output: int
    dependencies: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "input": self.input,
            "output": self.output,
            "dependencies": list(self.dependencies),
        }


class ExecutionState(Mapping[str, ExecutionRecord]):
    """Append-only mapping of node id to record, kept in execution order."""

    def __init__(self) -> None:
        self._records: dict[str, ExecutionRecord] = {}

    def __getitem__(self, node_id: str) -> ExecutionRecord:
        return self._records[node_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"ExecutionState({self._records!r})"

    def record(self, node_id: str, record: ExecutionRecord) -> None:
        """Insert the record for a node. Each node is recorded exactly once."""
        if node_id in self._records:
            raise ValueError(f"Node {node_id} already has an execution record.")
        self._records[node_id] = record

    @property
    def last_node_id(self) -> str | None:
        if not self._records:
            return None
        return next(reversed(self._records))
