"""Tests for the project lint rules in scripts/extra_lints.py."""

import importlib.util
import sys
from pathlib import Path
from types import ModuleType

import pytest

ROOT = Path(__file__).resolve().parent.parent


def load_lints() -> ModuleType:
    spec = importlib.util.spec_from_file_location(
        "extra_lints", ROOT / "scripts" / "extra_lints.py"
    )
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    spec.loader.exec_module(module)
    return module


lints = load_lints()

SOURCE = Path("src/discrete_probability/example.py")
TEST = Path("tests/test_example.py")


def rules(path: Path, source: str) -> list[str]:
    return [error.rule for error in lints.lint_source(path, source)]


def test_project_tree_is_clean() -> None:
    """The package and its tests follow every rule."""
    errors = lints.lint_paths([ROOT / "src", ROOT / "tests"])
    assert errors == [], "\n".join(str(e) for e in errors)


def test_print_in_source_flagged() -> None:
    """print() belongs in scripts, not the package."""
    assert rules(SOURCE, "print('hi')\n") == ["no-print"]
    assert rules(TEST, "print('hi')\n") == []


@pytest.mark.parametrize("call", ["random.random()", "random.choice(xs)", "random.seed(1)"])
def test_global_random_flagged(call: str) -> None:
    """Global random functions bypass seeded sources."""
    assert rules(SOURCE, f"import random\n{call}\n") == ["no-global-random"]


def test_random_instance_allowed() -> None:
    """Building a random.Random instance is the sanctioned way."""
    assert rules(SOURCE, "import random\nrng = random.Random(3)\n") == []


def test_import_in_function_flagged() -> None:
    """Imports inside functions are only allowed in tests."""
    source = "def f():\n    import math\n    return math.pi\n"
    assert rules(SOURCE, source) == ["import-in-function"]
    assert rules(TEST, source) == []


def test_mutable_default_flagged() -> None:
    """List, dict and set defaults are shared between calls."""
    source = "def f(a=[], b=dict(), *, c={1}):\n    pass\n"
    assert rules(SOURCE, source) == ["mutable-default"] * 3


def test_class_tests_flagged() -> None:
    """Test classes are flagged unless they are hypothesis state machines."""
    assert rules(TEST, "class TestThing:\n    pass\n") == ["no-class-tests"]
    assert rules(TEST, "class TestMachine(Machine.TestCase):\n    pass\n") == []


def test_bare_except_flagged() -> None:
    """Bare except clauses swallow everything."""
    source = "try:\n    pass\nexcept:\n    raise\n"
    assert rules(SOURCE, source) == ["no-bare-except"]


def test_todo_needs_issue() -> None:
    """TODOs must cite an issue."""
    assert rules(SOURCE, "x = 1  # " + "TODO fix\n") == ["todo-needs-issue"]
    assert rules(SOURCE, "x = 1  # TODO: DP-12 fix\n") == []


def test_syntax_error_reported() -> None:
    """Unparseable files produce a single syntax error."""
    assert rules(SOURCE, "def (:\n") == ["syntax-error"]


def test_main_exit_codes(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """main returns 1 when any file fails and 0 otherwise."""
    good = tmp_path / "good.py"
    good.write_text("x = 1\n")
    bad = tmp_path / "bad.py"
    bad.write_text("print(1)\n")
    assert lints.main([str(good)]) == 0
    assert lints.main([str(bad)]) == 1
    assert "no-print" in capsys.readouterr().out
