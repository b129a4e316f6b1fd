"""Graph description loading."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from core.errors import MalformedGraph
from planner.execution_plan import GraphSpec, NodeSpec

logger = logging.getLogger("wasm_dag.loader")

_YAML_SUFFIXES = {".yaml", ".yml"}


class GraphSpecLoader:
    """Reads a graph file and decodes its node list.

    Only the shape is checked here. Id uniqueness and dependency references
    are left to the resolver.
    """

    def load(self, path: Path | str) -> GraphSpec:
        graph_path = Path(path).resolve()
        try:
            payload = graph_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise MalformedGraph(f"cannot read graph file: {exc}", graph_path) from exc
        except UnicodeDecodeError as exc:
            raise MalformedGraph(f"graph file is not valid UTF-8: {exc}", graph_path) from exc

        data = self._decode(payload, graph_path)
        if not isinstance(data, dict):
            raise MalformedGraph("top-level value must be an object", graph_path)
        raw_nodes = data.get("nodes")
        if not isinstance(raw_nodes, list):
            raise MalformedGraph("graph specification must contain a nodes array", graph_path)

        nodes: list[NodeSpec] = []
        for index, raw in enumerate(raw_nodes):
            if not isinstance(raw, dict):
                raise MalformedGraph(f"node #{index} is not an object", graph_path)
            try:
                nodes.append(NodeSpec.model_validate(raw))
            except ValidationError as exc:
                raise MalformedGraph(f"node #{index} is invalid: {exc}", graph_path) from exc

        logger.debug("Loaded %d nodes from %s", len(nodes), graph_path)
        return GraphSpec(nodes=tuple(nodes), source=graph_path)

    @staticmethod
    def _decode(payload: str, graph_path: Path) -> Any:
        if graph_path.suffix.lower() in _YAML_SUFFIXES:
            try:
                return yaml.safe_load(payload)
            except yaml.YAMLError as exc:
                raise MalformedGraph(f"invalid YAML: {exc}", graph_path) from exc
        try:
            return json.loads(payload)
        except json.JSONDecodeError as exc:
            raise MalformedGraph(f"invalid JSON: {exc}", graph_path) from exc
