from __future__ import annotations

import ast

from ._gate import require_arch_checks_enabled
from ._utils import iter_source_files, matches_prefix, parse_imports, read_tree

_SPAWNERS = frozenset({"run", "call", "check_call", "check_output", "Popen"})
_ALLOWED = frozenset({"platform/process.py"})


def _spawn_sites(tree: ast.AST) -> list[int]:
    """Lines calling subprocess.<spawner>(...) through the module name."""
    sites: list[int] = []
    for node in ast.walk(tree):
        match node:
            case ast.Call(func=ast.Attribute(value=ast.Name(id="subprocess"), attr=attr)) if (
                attr in _SPAWNERS
            ):
                sites.append(node.lineno)
            case _:
                pass
    return sites


def test_processes_are_only_spawned_by_platform_process() -> None:
    require_arch_checks_enabled()

    problems: list[str] = []
    for rel, path in iter_source_files():
        if rel in _ALLOWED:
            continue
        problems += [
            f"{rel}:{ref.line}: imports {ref.module}"
            for ref in parse_imports(path)
            if matches_prefix(ref.module, "subprocess")
        ]
        problems += [f"{rel}:{line}: spawns a process" for line in _spawn_sites(read_tree(path))]

    assert problems == [], "git and other tools go through platform.process:\n" + "\n".join(problems)
