"""Graph description models."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class NodeSpec(BaseModel):
    """One compute unit backed by a sandboxed module."""

    model_config = ConfigDict(frozen=True)

    id: str
    module_path: str = Field(
        validation_alias=AliasChoices("modulePath", "wasm", "module_path"),
    )
    depends_on: tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("dependsOn", "depends_on"),
    )

    @field_validator("depends_on", mode="before")
    @classmethod
    def _none_means_empty(cls, value: Any) -> Any:
        return () if value is None else value


class GraphSpec(BaseModel):
    """Ordered node collection parsed from one graph file."""

    model_config = ConfigDict(frozen=True)

    nodes: tuple[NodeSpec, ...] = ()
    source: Path | None = None

    @property
    def base_dir(self) -> Path:
        """Directory that module paths are resolved against."""
        if self.source is None:
            return Path.cwd()
        return self.source.parent
