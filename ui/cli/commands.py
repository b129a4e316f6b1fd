"""Typer command handlers."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import typer

from core.errors import GraphRunError
from core.orchestrator import Orchestrator, RuntimeBundle
from ui.cli.report import format_state, state_to_dict


def _runtime(config_path: Path | None = None) -> RuntimeBundle:
    try:
        bundle = Orchestrator(config_path=config_path).build()
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    _configure_logging(bundle.config)
    return bundle


def _configure_logging(config: dict[str, Any]) -> None:
    level_name = str(config.get("logging", {}).get("level", "WARNING")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _echo_event(event_name: str, payload: dict[str, Any]) -> None:
    typer.echo(f"[{event_name}] {json.dumps(payload, sort_keys=True)}", err=True)


def run_graph(
    graph: Path,
    as_json: bool = False,
    trace: bool = False,
    config_path: Path | None = None,
) -> None:
    """Execute a graph and print its final state."""
    bundle = _runtime(config_path)
    if trace:
        bundle.event_bus.subscribe("*", _echo_event)
    try:
        state = bundle.runner.run(graph)
    except GraphRunError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(json.dumps(state_to_dict(state), indent=2))
    else:
        typer.echo(format_state(state))


def validate_graph(graph: Path, config_path: Path | None = None) -> None:
    """Load and order a graph without executing any module."""
    bundle = _runtime(config_path)
    try:
        spec = bundle.loader.load(graph)
        ordered = bundle.resolver.order(spec.nodes)
    except GraphRunError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(f"Graph OK: {len(ordered)} nodes")
    for position, node in enumerate(ordered, start=1):
        typer.echo(f"{position}. {node.id} ({node.module_path})")


def config_show(config_path: Path | None = None) -> None:
    """Show effective runtime config."""
    bundle = _runtime(config_path)
    typer.echo(json.dumps(bundle.config, indent=2, default=str))
