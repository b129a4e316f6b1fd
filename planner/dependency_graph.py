"""Deterministic dependency ordering for graph nodes."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Sequence

from core.errors import CyclicGraph, DuplicateNode, ResolverFault, UnknownDependency
from planner.execution_plan import NodeSpec

logger = logging.getLogger("wasm_dag.resolver")


class DependencyResolver:
    """Orders nodes so every dependency runs before its dependents.

    Kahn's algorithm with a FIFO queue. Roots are seeded in declaration order
    and dependents are released in the order their edges were declared, so
    the same input sequence always yields the same output sequence.
    """

    def order(self, nodes: Sequence[NodeSpec]) -> list[NodeSpec]:
        by_id: dict[str, NodeSpec] = {}
        in_degree: dict[str, int] = {}
        dependents: dict[str, list[str]] = {}

        for node in nodes:
            if node.id in by_id:
                raise DuplicateNode(node.id)
            by_id[node.id] = node
            in_degree[node.id] = 0
            dependents[node.id] = []

        for node in nodes:
            for dep in node.depends_on:
                if dep not in by_id:
                    raise UnknownDependency(node.id, dep)
                in_degree[node.id] += 1
                dependents[dep].append(node.id)

        queue: deque[str] = deque(node.id for node in nodes if in_degree[node.id] == 0)
        ordered: list[NodeSpec] = []

        while queue:
            node_id = queue.popleft()
            ordered.append(by_id[node_id])
            for downstream in dependents[node_id]:
                remaining = in_degree[downstream] - 1
                if remaining < 0:
                    raise ResolverFault(downstream)
                in_degree[downstream] = remaining
                if remaining == 0:
                    queue.append(downstream)

        if len(ordered) != len(nodes):
            resolved = {node.id for node in ordered}
            members = [node.id for node in nodes if node.id not in resolved]
            raise CyclicGraph(members)

        logger.debug("Resolved order: %s", ", ".join(node.id for node in ordered))
        return ordered
