"""Sandboxed module execution tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from wasmtime import Store

from conftest import DOUBLE_MINUS_ONE, IDENTITY
from core.errors import InputOutOfRange, MissingEntryPoint, ModuleLoadFailure, ModuleTrap
from executor.module_executor import ModuleExecutor
from planner.execution_plan import NodeSpec


def _node(path: str) -> NodeSpec:
    return NodeSpec(id="unit", module_path=path)


def test_invokes_main_with_input(tmp_path: Path, write_module) -> None:
    write_module("mods/calc.wasm", DOUBLE_MINUS_ONE)
    assert ModuleExecutor().execute(tmp_path, _node("mods/calc.wasm"), 1001) == 2001


def test_i32_wraps(tmp_path: Path, write_module) -> None:
    write_module("calc.wasm", DOUBLE_MINUS_ONE)
    assert ModuleExecutor().execute(tmp_path, _node("calc.wasm"), 2**30) == 2**31 - 1
    assert ModuleExecutor().execute(tmp_path, _node("calc.wasm"), 2**31 - 1) == -3


def test_accepts_text_modules(tmp_path: Path) -> None:
    (tmp_path / "id.wat").write_text(IDENTITY, encoding="utf-8")
    assert ModuleExecutor().execute(tmp_path, _node("id.wat"), -5) == -5


def test_text_modules_can_be_disabled(tmp_path: Path) -> None:
    (tmp_path / "id.wat").write_text(IDENTITY, encoding="utf-8")
    with pytest.raises(ModuleLoadFailure):
        ModuleExecutor(allow_wat=False).execute(tmp_path, _node("id.wat"), 1)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ModuleLoadFailure) as excinfo:
        ModuleExecutor().execute(tmp_path, _node("nope.wasm"), 0)
    assert excinfo.value.node_id == "unit"
    assert excinfo.value.path == (tmp_path / "nope.wasm").resolve()


def test_garbage_binary(tmp_path: Path) -> None:
    (tmp_path / "bad.wasm").write_bytes(b"definitely not wasm")
    with pytest.raises(ModuleLoadFailure):
        ModuleExecutor().execute(tmp_path, _node("bad.wasm"), 0)


def test_host_imports_are_refused(tmp_path: Path, write_module) -> None:
    write_module(
        "imports.wasm",
        """
        (module
          (import "env" "log" (func $log (param i32)))
          (func (export "main") (param i32) (result i32)
            local.get 0))
        """,
    )
    with pytest.raises(ModuleLoadFailure) as excinfo:
        ModuleExecutor().execute(tmp_path, _node("imports.wasm"), 0)
    assert "env.log" in str(excinfo.value)


def test_missing_main(tmp_path: Path, write_module) -> None:
    write_module(
        "nomain.wasm",
        """
        (module
          (func (export "run") (param i32) (result i32)
            local.get 0))
        """,
    )
    with pytest.raises(MissingEntryPoint) as excinfo:
        ModuleExecutor().execute(tmp_path, _node("nomain.wasm"), 0)
    assert excinfo.value.entry_point == "main"


def test_main_that_is_not_a_function(tmp_path: Path, write_module) -> None:
    write_module("memory.wasm", '(module (memory (export "main") 1))')
    with pytest.raises(MissingEntryPoint):
        ModuleExecutor().execute(tmp_path, _node("memory.wasm"), 0)


def test_main_with_wrong_signature(tmp_path: Path, write_module) -> None:
    write_module(
        "twoargs.wasm",
        """
        (module
          (func (export "main") (param i32 i32) (result i32)
            local.get 0))
        """,
    )
    with pytest.raises(MissingEntryPoint):
        ModuleExecutor().execute(tmp_path, _node("twoargs.wasm"), 0)


def test_custom_entry_point(tmp_path: Path, write_module) -> None:
    write_module(
        "run.wasm",
        """
        (module
          (func (export "run") (param i32) (result i32)
            local.get 0
            i32.const 1
            i32.add))
        """,
    )
    assert ModuleExecutor(entry_point="run").execute(tmp_path, _node("run.wasm"), 41) == 42


def test_trap_is_reported(tmp_path: Path, write_module) -> None:
    write_module(
        "trap.wasm",
        """
        (module
          (func (export "main") (param i32) (result i32)
            unreachable))
        """,
    )
    with pytest.raises(ModuleTrap) as excinfo:
        ModuleExecutor().execute(tmp_path, _node("trap.wasm"), 0)
    assert excinfo.value.node_id == "unit"


def test_no_state_survives_between_calls(tmp_path: Path, write_module) -> None:
    write_module(
        "counter.wasm",
        """
        (module
          (global $count (mut i32) (i32.const 0))
          (func (export "main") (param i32) (result i32)
            global.get $count
            i32.const 1
            i32.add
            global.set $count
            global.get $count))
        """,
    )
    executor = ModuleExecutor()
    assert executor.execute(tmp_path, _node("counter.wasm"), 0) == 1
    assert executor.execute(tmp_path, _node("counter.wasm"), 0) == 1


def test_input_outside_i32_is_rejected(tmp_path: Path, write_module) -> None:
    write_module("id.wasm", IDENTITY)
    with pytest.raises(InputOutOfRange) as excinfo:
        ModuleExecutor().execute(tmp_path, _node("id.wasm"), 2**31)
    assert excinfo.value.node_id == "unit"


def _tracking_executor(closed: list[bool]) -> ModuleExecutor:
    class _TrackingStore(Store):
        def close(self) -> None:
            closed.append(True)
            super().close()

    executor = ModuleExecutor()
    executor.store_factory = _TrackingStore
    return executor


def test_store_closed_after_successful_call(tmp_path: Path, write_module) -> None:
    write_module("id.wasm", IDENTITY)
    closed: list[bool] = []
    assert _tracking_executor(closed).execute(tmp_path, _node("id.wasm"), 3) == 3
    assert closed == [True]


def test_store_closed_after_trap(tmp_path: Path, write_module) -> None:
    write_module(
        "trap.wasm",
        """
        (module
          (func (export "main") (param i32) (result i32)
            unreachable))
        """,
    )
    closed: list[bool] = []
    with pytest.raises(ModuleTrap):
        _tracking_executor(closed).execute(tmp_path, _node("trap.wasm"), 0)
    assert closed == [True]
