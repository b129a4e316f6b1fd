"""CLI entrypoint for wasm-dag-runner."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ui.cli import commands

app = typer.Typer(help="Run DAGs of sandboxed WebAssembly modules")
config_app = typer.Typer(help="Configuration commands")

_CONFIG_OPTION = typer.Option(
    None, "--config", "-c", help="YAML file merged over the default configuration"
)


@app.command("run")
def run_cmd(
    graph: Path = typer.Argument(Path("graph.json"), help="Graph description file"),
    as_json: bool = typer.Option(False, "--json", help="Print the state as JSON"),
    trace: bool = typer.Option(False, "--trace", help="Echo runner events to stderr"),
    config: Optional[Path] = _CONFIG_OPTION,
) -> None:
    """Execute every node of a graph in dependency order."""
    commands.run_graph(graph=graph, as_json=as_json, trace=trace, config_path=config)


@app.command("validate")
def validate_cmd(
    graph: Path = typer.Argument(Path("graph.json"), help="Graph description file"),
    config: Optional[Path] = _CONFIG_OPTION,
) -> None:
    """Check a graph and print its execution order."""
    commands.validate_graph(graph=graph, config_path=config)


@config_app.command("show")
def config_show_cmd(config: Optional[Path] = _CONFIG_OPTION) -> None:
    """Show effective configuration."""
    commands.config_show(config_path=config)


app.add_typer(config_app, name="config")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
