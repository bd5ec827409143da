"""
Import resolution rule.

Static rule that checks every artifact's imports can be resolved.
Python artifacts are analyzed with the AST: every name read must be
bound somewhere in the module, imported, or builtin. Script artifacts
(JS/TS) have their import specifiers checked for empty or placeholder
targets; relative specifiers are not resolved, since a phase may import
artifacts committed by earlier phases. Does NOT execute code.
"""

import ast
import builtins
import re

from phaseguard.domain.models import ArtifactSpec
from phaseguard.rules.base import PerArtifactRule

_SCRIPT_SUFFIXES = (".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs")

# import x from "y"; import "y"; export { x } from "y"
_SCRIPT_IMPORT = re.compile(
    r"""(?:import|export)\s+(?:[^'";]*?\s+from\s+)?['"]([^'"]*)['"]"""
)
_PLACEHOLDER_SPECIFIERS = frozenset({"undefined", "null", "TODO", "..."})

_BUILTINS = frozenset(dir(builtins))


def _bound_names(tree: ast.AST) -> set[str]:
    """
    Every name the module binds, at any scope.

    Assignment-like targets of every statement form (assignments, loops,
    with, walrus, comprehensions, del) show up as Name nodes in Store or
    Del context; the remaining binders carry their name as a plain string.
    """
    bound: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Name):
            if isinstance(node.ctx, ast.Store | ast.Del):
                bound.add(node.id)

        elif isinstance(node, ast.Import):
            bound.update(a.asname or a.name.split(".")[0] for a in node.names)

        elif isinstance(node, ast.ImportFrom):
            bound.update(a.asname or a.name for a in node.names if a.name != "*")

        elif isinstance(node, ast.FunctionDef | ast.AsyncFunctionDef | ast.ClassDef):
            bound.add(node.name)
            # PEP 695 parameters: def f[T](x: T)
            bound.update(p.name for p in getattr(node, "type_params", ()))

        elif isinstance(node, ast.arg):
            bound.add(node.arg)

        elif isinstance(node, ast.Global | ast.Nonlocal):
            bound.update(node.names)

        # except E as name, case Point(x=name), case [*rest], case {**rest}
        elif isinstance(node, ast.ExceptHandler | ast.MatchAs | ast.MatchStar):
            if node.name:
                bound.add(node.name)

        elif isinstance(node, ast.MatchMapping):
            if node.rest:
                bound.add(node.rest)

    return bound


def _read_names(tree: ast.AST) -> set[str]:
    """Names read by the code (`pytest` in `pytest.raises()`)."""
    return {
        node.id
        for node in ast.walk(tree)
        if isinstance(node, ast.Name) and isinstance(node.ctx, ast.Load)
    }


class ImportResolutionRule(PerArtifactRule):
    """
    Validates that all imports in an artifact resolve.

    Catches common generation mistakes like using `pytest.raises()`
    without `import pytest`, or `import x from "undefined"`.
    """

    name = "imports"
    description = "All imports resolve correctly"

    def applies_to(self, artifact: ArtifactSpec) -> bool:
        return artifact.path.endswith((".py", *_SCRIPT_SUFFIXES))

    def check(self, artifact: ArtifactSpec) -> str | None:
        if artifact.path.endswith(".py"):
            return self._check_python(artifact.content)
        return self._check_script(artifact.content)

    def _check_script(self, content: str) -> str | None:
        bad = [
            spec
            for spec in _SCRIPT_IMPORT.findall(content)
            if spec.strip() in _PLACEHOLDER_SPECIFIERS or not spec.strip()
        ]
        if bad:
            return "Unresolvable import specifiers: " + ", ".join(
                repr(s) for s in bad
            )
        return None

    def _check_python(self, code: str) -> str | None:
        try:
            tree = ast.parse(code)
        except SyntaxError as e:
            return f"Syntax error: {e}"

        undefined = _read_names(tree) - _bound_names(tree) - _BUILTINS
        if undefined:
            return f"Undefined names (missing imports?): {', '.join(sorted(undefined))}"
        return None
