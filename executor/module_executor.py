"""Sandboxed WebAssembly module execution."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from wasmtime import (
    Engine,
    Func,
    Instance,
    Module,
    Store,
    Trap,
    ValType,
    WasmtimeError,
    wat2wasm,
)

from core.errors import InputOutOfRange, MissingEntryPoint, ModuleLoadFailure, ModuleTrap
from planner.execution_plan import NodeSpec

logger = logging.getLogger("wasm_dag.executor")

I32_MIN = -(2**31)
I32_MAX = 2**31 - 1


class ModuleExecutor:
    """Loads one module per call and invokes its entry point once.

    Modules are instantiated with no imports, so they cannot reach back into
    the host. Each call gets a fresh store that is closed when the call ends,
    whether it succeeded or not.
    """

    store_factory = Store

    def __init__(self, entry_point: str = "main", allow_wat: bool = True) -> None:
        self.entry_point = entry_point
        self.allow_wat = allow_wat
        self.engine = Engine()

    def execute(self, base_dir: Path, node: NodeSpec, value: int) -> int:
        """Run ``node``'s module with ``value`` and return its i32 result."""
        if not I32_MIN <= value <= I32_MAX:
            raise InputOutOfRange(node.id, value)
        module_path = (Path(base_dir) / node.module_path).resolve()
        module = self._compile(node, module_path)
        with self._sandbox(node, module_path, module) as (store, instance):
            entry = instance.exports(store).get(self.entry_point)
            if not isinstance(entry, Func):
                raise MissingEntryPoint(node.id, self.entry_point)
            signature = entry.type(store)
            if signature.params != [ValType.i32()] or signature.results != [ValType.i32()]:
                raise MissingEntryPoint(
                    node.id, self.entry_point, "expected signature (i32) -> i32"
                )
            try:
                output = entry(store, value)
            except (Trap, WasmtimeError) as exc:
                raise ModuleTrap(node.id, str(exc)) from exc
        logger.debug("Node %s: %s(%d) -> %d", node.id, self.entry_point, value, output)
        return int(output)

    def _compile(self, node: NodeSpec, module_path: Path) -> Module:
        try:
            binary = module_path.read_bytes()
        except OSError as exc:
            raise ModuleLoadFailure(node.id, module_path, str(exc)) from exc
        try:
            if module_path.suffix == ".wat":
                if not self.allow_wat:
                    raise ModuleLoadFailure(node.id, module_path, "text modules are disabled")
                binary = bytes(wat2wasm(binary.decode("utf-8")))
            module = Module(self.engine, binary)
        except (UnicodeDecodeError, WasmtimeError) as exc:
            raise ModuleLoadFailure(node.id, module_path, str(exc)) from exc
        if module.imports:
            names = ", ".join(f"{imp.module}.{imp.name}" for imp in module.imports)
            raise ModuleLoadFailure(
                node.id, module_path, f"module requires host imports: {names}"
            )
        return module

    @contextmanager
    def _sandbox(
        self, node: NodeSpec, module_path: Path, module: Module
    ) -> Iterator[tuple[Store, Instance]]:
        store = self.store_factory(self.engine)
        try:
            try:
                instance = Instance(store, module, [])
            except (Trap, WasmtimeError) as exc:
                raise ModuleLoadFailure(node.id, module_path, str(exc)) from exc
            yield store, instance
        finally:
            store.close()
            logger.debug("Released sandbox for node %s", node.id)
