#!/usr/bin/env python3
"""Project-specific lint rules for discrete-probability.

Rules:
1. No class-based tests in test files (hypothesis stateful TestCases excepted)
2. No imports inside functions in source files
3. No mutable default arguments
4. No print() in source files (use logging)
5. No calls to the global ``random`` module functions in source files; every
   draw must come from a seeded RandomSource so output stays reproducible
6. No bare ``except:`` clauses
7. No TODO/FIXME comments without issue references

Usage: python scripts/extra_lints.py [PATH ...]
"""

import ast
import re
import sys
from dataclasses import dataclass
from pathlib import Path

DEFAULT_PATHS = ("src", "tests")

# random.Random is how sources are built; everything else touches global state.
ALLOWED_RANDOM_ATTRIBUTES = frozenset({"Random"})

MUTABLE_FACTORIES = frozenset({"list", "dict", "set", "bytearray"})


@dataclass
class LintError:
    file: Path
    line: int
    column: int
    rule: str
    message: str

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}: {self.rule}: {self.message}"


def is_test_file(path: Path) -> bool:
    return path.name.startswith("test_") or path.name == "conftest.py"


class LintVisitor(ast.NodeVisitor):
    """Collects rule violations for one module."""

    def __init__(self, file: Path) -> None:
        self.file = file
        self.errors: list[LintError] = []
        self._is_test_file = is_test_file(file)
        self._function_depth = 0

    def _report(self, node: ast.AST, rule: str, message: str) -> None:
        self.errors.append(
            LintError(
                self.file,
                getattr(node, "lineno", 0),
                getattr(node, "col_offset", 0),
                rule,
                message,
            )
        )

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        if self._is_test_file and node.name.startswith("Test"):
            stateful = any(
                isinstance(base, ast.Attribute) and base.attr == "TestCase"
                for base in node.bases
            )
            if not stateful:
                self._report(
                    node,
                    "no-class-tests",
                    f"Class-based test '{node.name}' found. Use functions.",
                )
        self.generic_visit(node)

    def _visit_function(self, node: ast.FunctionDef | ast.AsyncFunctionDef) -> None:
        for default in [*node.args.defaults, *node.args.kw_defaults]:
            if default is not None and _is_mutable(default):
                self._report(
                    default,
                    "mutable-default",
                    "Mutable default argument. Use None instead.",
                )
        self._function_depth += 1
        self.generic_visit(node)
        self._function_depth -= 1

    visit_FunctionDef = _visit_function
    visit_AsyncFunctionDef = _visit_function

    def _visit_import(self, node: ast.Import | ast.ImportFrom) -> None:
        if self._function_depth and not self._is_test_file:
            self._report(
                node,
                "import-in-function",
                "Import inside function. Move to module level.",
            )
        self.generic_visit(node)

    visit_Import = _visit_import
    visit_ImportFrom = _visit_import

    def visit_Call(self, node: ast.Call) -> None:
        func = node.func
        if not self._is_test_file:
            if isinstance(func, ast.Name) and func.id == "print":
                self._report(
                    node, "no-print", "Use logging instead of print() in source code."
                )
            if (
                isinstance(func, ast.Attribute)
                and isinstance(func.value, ast.Name)
                and func.value.id == "random"
                and func.attr not in ALLOWED_RANDOM_ATTRIBUTES
            ):
                self._report(
                    node,
                    "no-global-random",
                    f"random.{func.attr}() uses global state. Draw from a RandomSource.",
                )
        self.generic_visit(node)

    def visit_ExceptHandler(self, node: ast.ExceptHandler) -> None:
        if node.type is None:
            self._report(node, "no-bare-except", "Bare except. Name the exception.")
        self.generic_visit(node)


def _is_mutable(node: ast.expr) -> bool:
    if isinstance(node, (ast.List, ast.Dict, ast.Set)):
        return True
    return (
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Name)
        and node.func.id in MUTABLE_FACTORIES
    )


TODO_PATTERN = re.compile(r"#\s*(TODO|FIXME)(?!:\s*\w+-\d+)", re.IGNORECASE)


def check_todo_comments(file: Path, source: str) -> list[LintError]:
    errors: list[LintError] = []
    for lineno, line in enumerate(source.splitlines(), 1):
        match = TODO_PATTERN.search(line)
        if match:
            errors.append(
                LintError(
                    file,
                    lineno,
                    match.start(),
                    "todo-needs-issue",
                    f"{match.group(1)} needs issue reference (e.g., TODO: DP-123).",
                )
            )
    return errors


def lint_source(path: Path, source: str) -> list[LintError]:
    """Lint ``source`` as though it were the contents of ``path``."""
    try:
        tree = ast.parse(source)
    except SyntaxError as e:
        return [LintError(path, e.lineno or 0, e.offset or 0, "syntax-error", str(e))]
    visitor = LintVisitor(path)
    visitor.visit(tree)
    return visitor.errors + check_todo_comments(path, source)


def lint_file(path: Path) -> list[LintError]:
    return lint_source(path, path.read_text())


def lint_paths(paths: list[Path]) -> list[LintError]:
    errors: list[LintError] = []
    for root in paths:
        if root.is_file():
            errors.extend(lint_file(root))
        elif root.is_dir():
            for py_file in sorted(root.rglob("*.py")):
                errors.extend(lint_file(py_file))
    return sorted(errors, key=lambda e: (str(e.file), e.line, e.column))


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    errors = lint_paths([Path(p) for p in (args or DEFAULT_PATHS)])

    if errors:
        for error in errors:
            print(error)
        print(f"\nFound {len(errors)} custom lint error(s)")
        return 1

    print("All custom lint checks passed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
