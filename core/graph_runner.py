"""Sequential graph execution loop.

Load → Resolve → for each node in order: resolve input → execute → record.

Exactly one node runs at a time, in resolved order, even when neighbouring
nodes are independent. The first failure aborts the run and no state is
returned.
"""

from __future__ import annotations

import logging
from pathlib import Path

from core.event_bus import (
    NODE_RECORDED,
    NODE_STARTED,
    RUN_COMPLETED,
    RUN_FAILED,
    RUN_STARTED,
    EventBus,
)
from core.state_manager import ExecutionRecord, ExecutionState
from executor.input_resolver import InputResolver
from executor.module_executor import ModuleExecutor
from planner.dependency_graph import DependencyResolver
from planner.execution_plan import GraphSpec
from planner.graph_loader import GraphSpecLoader

logger = logging.getLogger("wasm_dag.runner")


class GraphRunner:
    """Drives one full graph run and returns the accumulated state."""

    def __init__(
        self,
        loader: GraphSpecLoader | None = None,
        resolver: DependencyResolver | None = None,
        input_resolver: InputResolver | None = None,
        executor: ModuleExecutor | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.loader = loader or GraphSpecLoader()
        self.resolver = resolver or DependencyResolver()
        self.input_resolver = input_resolver or InputResolver()
        self.executor = executor or ModuleExecutor()
        self.event_bus = event_bus or EventBus()

    def run(self, graph_path: Path | str) -> ExecutionState:
        """Load the graph at ``graph_path`` and execute every node."""
        graph = self.loader.load(graph_path)
        return self.run_spec(graph)

    def run_spec(self, graph: GraphSpec) -> ExecutionState:
        """Execute an already-loaded graph."""
        source = str(graph.source) if graph.source else None
        self.event_bus.emit(RUN_STARTED, {"graph": source, "nodes": len(graph.nodes)})
        try:
            state = self._execute(graph)
        except Exception as exc:
            logger.error("Graph run failed: %s", exc)
            self.event_bus.emit(RUN_FAILED, {"graph": source, "error": str(exc)})
            raise
        self.event_bus.emit(RUN_COMPLETED, {"graph": source, "nodes": len(state)})
        return state

    def _execute(self, graph: GraphSpec) -> ExecutionState:
        ordered = self.resolver.order(graph.nodes)
        logger.info(
            "Executing %d nodes: %s", len(ordered), " -> ".join(node.id for node in ordered)
        )
        base_dir = graph.base_dir
        state = ExecutionState()

        for node in ordered:
            value = self.input_resolver.resolve_input(node, state)
            self.event_bus.emit(NODE_STARTED, {"node": node.id, "input": value})
            output = self.executor.execute(base_dir, node, value)
            record = ExecutionRecord(
                input=value,
                output=output,
                dependencies=tuple(node.depends_on),
            )
            state.record(node.id, record)
            logger.info("Node %s: input=%d -> output=%d", node.id, value, output)
            self.event_bus.emit(NODE_RECORDED, {"node": node.id, **record.to_dict()})

        return state
