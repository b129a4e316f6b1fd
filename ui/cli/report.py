"""Text and JSON rendering of execution state."""

from __future__ import annotations

from typing import Any

from core.state_manager import ExecutionState


def format_state(state: ExecutionState) -> str:
    """Render one line per executed node, in execution order."""
    lines: list[str] = []
    for node_id, record in state.items():
        deps = ", ".join(record.dependencies) or "none"
        lines.append(f"{node_id}: input={record.input} -> output={record.output} (deps: {deps})")
    final_node = state.last_node_id
    if final_node is not None:
        lines.append(f"Final output: {final_node} = {state[final_node].output}")
    return "\n".join(lines)


def state_to_dict(state: ExecutionState) -> dict[str, Any]:
    return {node_id: record.to_dict() for node_id, record in state.items()}
