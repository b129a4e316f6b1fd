"""Shared fixtures: small wasm modules compiled from WAT."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from wasmtime import wat2wasm

CONSTANT_1001 = """
(module
  (func (export "main") (param i32) (result i32)
    i32.const 1001))
"""

DOUBLE_MINUS_ONE = """
(module
  (func (export "main") (param $x i32) (result i32)
    local.get $x
    i32.const 2
    i32.mul
    i32.const 1
    i32.sub))
"""

DOUBLE = """
(module
  (func (export "main") (param $x i32) (result i32)
    local.get $x
    i32.const 2
    i32.mul))
"""

IDENTITY = """
(module
  (func (export "main") (param $x i32) (result i32)
    local.get $x))
"""


@pytest.fixture
def write_module(tmp_path: Path) -> Callable[[str, str], Path]:
    """Compile WAT source to a binary .wasm file under tmp_path."""

    def _write(name: str, source: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(bytes(wat2wasm(source)))
        return path

    return _write


@pytest.fixture
def write_graph(tmp_path: Path) -> Callable[[list[dict[str, Any]]], Path]:
    """Write a graph.json with the given node entries."""

    def _write(nodes: list[dict[str, Any]], name: str = "graph.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps({"nodes": nodes}), encoding="utf-8")
        return path

    return _write
