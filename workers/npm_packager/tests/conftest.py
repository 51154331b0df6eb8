"""
Test fixtures for npm_packager.

Provides a small Deno-style project on disk and a fake external
toolchain (npm / npx / tsc) patched into ``npm_packager.core.process``,
so no test needs Node.js installed.
"""
from __future__ import annotations

import os
import subprocess
import textwrap
from pathlib import Path
from typing import Dict, List

import pytest

from npm_packager.core import process


# ── Sample Deno sources ─────────────────────────────────────────────────────

MOD_TS = textwrap.dedent("""\
    export { greet, farewell } from "./utils/greetings.ts";
    export { add, multiply } from './utils/math.ts';
    export type { Person } from "./types.ts";

    export function hello(name: string): string {
    \treturn `Hello, ${name}!`;
    }

    export async function lazyMath() {
    \treturn await import("./utils/math.ts");
    }
""")

GREETINGS_TS = textwrap.dedent("""\
    import type { Person } from "../types.ts";

    export function greet(person: Person): string {
    \treturn `Hello, ${person.name}! You are ${person.age} years old.`;
    }

    export function farewell(name: string): string {
    \treturn `Goodbye, ${name}!`;
    }
""")

MATH_TS = textwrap.dedent("""\
    export function add(a: number, b: number): number {
    \treturn a + b;
    }

    export function multiply(a: number, b: number): number {
    \treturn a * b;
    }
""")

TYPES_TS = textwrap.dedent("""\
    export interface Person {
    \tname: string;
    \tage: number;
    }
""")

UTILS_ENTRY_TS = 'export * from "./utils/math.ts";\n'


# ── Fake toolchain ──────────────────────────────────────────────────────────

class FakeToolchain:
    """
    Stand-in for ``subprocess.run``.

    Records every call, returns the configured exit code per executable
    and, for a successful ``tsc``, emits ``dist/<name>.js`` + ``.d.ts``
    for every staged ``src/**/*.ts`` file relative to the process cwd.
    """

    def __init__(self):
        self.calls: List[Dict] = []
        self.exit_codes: Dict[str, int] = {}
        self.outputs: Dict[str, tuple] = {}

    def names(self) -> List[str]:
        return [c["name"] for c in self.calls]

    def __call__(self, args, cwd=None, capture_output=False, text=False, **kwargs):
        name = Path(args[0]).name
        self.calls.append({
            "name": name,
            "args": list(args[1:]),
            "cwd": cwd,
            "process_cwd": os.getcwd(),
        })
        code = self.exit_codes.get(name, 0)
        stdout, stderr = self.outputs.get(name, ("", ""))
        if name == "tsc" and code == 0:
            self._emit(Path(os.getcwd()))
        return subprocess.CompletedProcess(args, code, stdout=stdout, stderr=stderr)

    @staticmethod
    def _emit(root: Path) -> None:
        src = root / "src"
        for ts in src.rglob("*.ts"):
            rel = ts.relative_to(src).with_suffix("")
            target = root / "dist" / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.with_suffix(".js").write_text(ts.read_text())
            target.with_suffix(".d.ts").write_text("export {};\n")


@pytest.fixture
def fake_toolchain(monkeypatch) -> FakeToolchain:
    """Patch subprocess + PATH lookup in npm_packager.core.process."""
    fake = FakeToolchain()
    monkeypatch.setattr(process.shutil, "which", lambda name: f"/usr/bin/{name}")
    monkeypatch.setattr(process.subprocess, "run", fake)
    return fake


# ── Sample project ──────────────────────────────────────────────────────────

def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


@pytest.fixture
def deno_project(tmp_path: Path) -> Path:
    """
    A Deno project root::

        LICENSE
        README.md
        docs/guide.md
        src/mod.ts
        src/utils.ts
        src/types.ts
        src/utils/greetings.ts
        src/utils/math.ts
        src/data/fixture.json
    """
    root = tmp_path / "project"
    _write(root / "LICENSE", "MIT License\n")
    _write(root / "README.md", "# example\n")
    _write(root / "docs" / "guide.md", "# guide\n")
    _write(root / "src" / "mod.ts", MOD_TS)
    _write(root / "src" / "utils.ts", UTILS_ENTRY_TS)
    _write(root / "src" / "types.ts", TYPES_TS)
    _write(root / "src" / "utils" / "greetings.ts", GREETINGS_TS)
    _write(root / "src" / "utils" / "math.ts", MATH_TS)
    _write(root / "src" / "data" / "fixture.json", '{"ok": true}\n')
    return root


def all_files(root: Path) -> List[str]:
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())


@pytest.fixture
def list_files():
    return all_files
