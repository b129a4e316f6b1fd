"""Scalar input resolution from upstream execution records."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from core.errors import MissingUpstreamState
from core.state_manager import ExecutionRecord, ExecutionState
from planner.execution_plan import NodeSpec

Reducer = Callable[[NodeSpec, Sequence[ExecutionRecord]], int]


def last_output(node: NodeSpec, records: Sequence[ExecutionRecord]) -> int:
    """Take the output of the last-declared dependency only."""
    _ = node
    return records[-1].output


class InputResolver:
    """Computes the input fed to a node from records already in the state.

    Roots get ``0``. Otherwise the ordered upstream records are handed to
    ``reducer``. The default keeps only the last-declared dependency and
    does not require the earlier ones to be recorded.
    """

    def __init__(self, reducer: Reducer = last_output) -> None:
        self.reducer = reducer

    def resolve_input(self, node: NodeSpec, state: ExecutionState) -> int:
        if not node.depends_on:
            return 0
        if self.reducer is last_output:
            # Only the last-declared dependency has to be recorded.
            return self._lookup(node, node.depends_on[-1], state).output
        records = [self._lookup(node, dep, state) for dep in node.depends_on]
        return self.reducer(node, records)

    @staticmethod
    def _lookup(node: NodeSpec, dependency: str, state: ExecutionState) -> ExecutionRecord:
        record = state.get(dependency)
        if record is None:
            raise MissingUpstreamState(node.id, dependency)
        return record
