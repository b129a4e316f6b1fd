"""Top-level runtime wiring."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from core.event_bus import EventBus
from core.graph_runner import GraphRunner
from core.policy_runtime import load_effective_config, runtime_settings
from executor.input_resolver import InputResolver
from executor.module_executor import ModuleExecutor
from planner.dependency_graph import DependencyResolver
from planner.graph_loader import GraphSpecLoader


@dataclass
class RuntimeBundle:
    """Holds initialized runtime components."""

    config: dict[str, Any]
    event_bus: EventBus
    loader: GraphSpecLoader
    resolver: DependencyResolver
    runner: GraphRunner


class Orchestrator:
    """Creates and wires runtime components for CLI use."""

    def __init__(self, root: Path | None = None, config_path: Path | None = None) -> None:
        default_root = Path(__file__).resolve().parents[1]
        self.root = (root or default_root).resolve()
        self.config_path = config_path

    def build(self) -> RuntimeBundle:
        config = load_effective_config(self.root, self.config_path)
        settings = runtime_settings(config)

        event_bus = EventBus()
        loader = GraphSpecLoader()
        resolver = DependencyResolver()
        runner = GraphRunner(
            loader=loader,
            resolver=resolver,
            input_resolver=InputResolver(),
            executor=ModuleExecutor(
                entry_point=settings["entry_point"],
                allow_wat=settings["allow_wat"],
            ),
            event_bus=event_bus,
        )
        return RuntimeBundle(
            config=config,
            event_bus=event_bus,
            loader=loader,
            resolver=resolver,
            runner=runner,
        )
