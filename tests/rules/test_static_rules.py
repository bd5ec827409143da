"""Tests for the static validation rules."""

import sys

import pytest

from phaseguard.domain.models import ArtifactKind, ArtifactSpec
from phaseguard.rules import (
    BalancedSyntaxRule,
    EntryPointRule,
    ImportResolutionRule,
    TypeSoundnessRule,
)


def make_artifact(path: str, content: str) -> ArtifactSpec:
    """Create an artifact with given path and content."""
    return ArtifactSpec(path=path, content=content)


class TestImportResolutionRule:
    """Tests for Python and script import checks."""

    @pytest.fixture
    def rule(self) -> ImportResolutionRule:
        return ImportResolutionRule()

    def test_python_with_all_imports_passes(self, rule):
        code = """
import pytest

def test_example():
    with pytest.raises(ValueError):
        raise ValueError()
"""
        outcome = rule.evaluate([make_artifact("tests/test_x.py", code)])

        assert outcome.passed
        assert outcome.rule_name == "imports"

    def test_python_missing_import_fails(self, rule):
        code = "def test_example():\n    pytest.fail('x')\n"

        outcome = rule.evaluate([make_artifact("tests/test_x.py", code)])

        assert not outcome.passed
        assert outcome.failing_paths == ("tests/test_x.py",)
        assert "pytest" in outcome.message

    def test_python_definitions_count(self, rule):
        code = """
from typing import Any

class Box:
    pass

def build(*args, key=None, **kwargs):
    items = [x for x in args]
    total = 0
    for i, item in enumerate(items):
        total += i
    with open("f") as handle:
        handle.read()
    try:
        pass
    except OSError as err:
        print(err)
    if (n := len(items)) > 0:
        return Box(), n, key, kwargs, total, Any
"""
        assert rule.evaluate([make_artifact("src/box.py", code)]).passed

    def test_python_syntax_error_reported(self, rule):
        outcome = rule.evaluate([make_artifact("src/bad.py", "def broken(:\n")])

        assert not outcome.passed
        assert "Syntax error" in outcome.message

    def test_script_real_specifiers_pass(self, rule):
        code = (
            'import React from "react";\n'
            "import { useAuth } from '../hooks/useAuth';\n"
            'export { Button } from "./Button";\n'
        )
        assert rule.evaluate([make_artifact("src/App.tsx", code)]).passed

    @pytest.mark.parametrize(
        "code",
        [
            'import x from "";\n',
            'import x from "undefined";\n',
            'import "TODO";\n',
        ],
    )
    def test_script_placeholder_specifiers_fail(self, rule, code):
        outcome = rule.evaluate([make_artifact("src/App.tsx", code)])

        assert not outcome.passed
        assert "Unresolvable import specifiers" in outcome.message

    @pytest.mark.parametrize(
        "code",
        [
            'import nullthrows from "nullthrows";\n',
            'import { isUndefined } from "../utils/undefined-checks";\n',
            'import "./TODOList.css";\n',
        ],
    )
    def test_script_names_containing_placeholders_pass(self, rule, code):
        assert rule.evaluate([make_artifact("src/lib/x.ts", code)]).passed

    def test_relative_imports_of_earlier_phases_pass(self, rule):
        code = 'import { api } from "../lib/api";\nexport const load = () => api();\n'

        assert rule.evaluate([make_artifact("src/hooks/useLoad.ts", code)]).passed

    def test_python_match_global_and_del_bindings(self, rule):
        code = """
counter = 0

def bump():
    global counter
    counter += 1

def describe(event):
    match event:
        case {"kind": kind, **extra}:
            return kind, extra
        case [first, *others]:
            return first, others
        case str() as text:
            return text
    scratch = 1
    del scratch
"""
        assert rule.evaluate([make_artifact("src/events.py", code)]).passed

    @pytest.mark.skipif(sys.version_info < (3, 12), reason="PEP 695 syntax")
    def test_python_type_parameters_bound(self, rule):
        code = "def first[T](items: list[T]) -> T:\n    return items[0]\n"

        assert rule.evaluate([make_artifact("src/first.py", code)]).passed

    def test_other_files_ignored(self, rule):
        assert rule.evaluate([make_artifact("README.md", "import x from ''")]).passed


class TestBalancedSyntaxRule:
    """Tests for syntax checks."""

    @pytest.fixture
    def rule(self) -> BalancedSyntaxRule:
        return BalancedSyntaxRule()

    def test_balanced_script_passes(self, rule):
        code = "export function f(a) {\n  return [a, (a)];\n}\n"
        assert rule.evaluate([make_artifact("src/f.ts", code)]).passed

    def test_truncated_script_fails(self, rule):
        outcome = rule.evaluate(
            [make_artifact("src/f.ts", "export function f(a) {\n  return a;\n")]
        )

        assert not outcome.passed
        assert "Unclosed '{' opened on line 1" in outcome.message
        assert outcome.message.startswith("✗ No syntax errors")

    def test_brackets_in_string_literal_ignored(self, rule):
        code = 'export default function Smile() { return <p>{"Hi :)"}</p>; }\n'

        assert rule.evaluate([make_artifact("src/components/Smile.tsx", code)]).passed

    @pytest.mark.parametrize(
        "code",
        [
            "const face = '(:';\n",
            "const msg = `total: ${count} ]`;\n",
            "// TODO: handle ( later\nexport const x = 1;\n",
            "/* example: f(a, [b */\nexport const y = [1];\n",
            'const escaped = "quote \\" (";\n',
        ],
    )
    def test_strings_and_comments_skipped(self, rule, code):
        assert rule.evaluate([make_artifact("src/x.ts", code)]).passed

    def test_apostrophe_in_jsx_text(self, rule):
        code = (
            "export const List = ({ items }) => (\n"
            "  <ul>{items.map((i) => <li>Don't {i}</li>)}</ul>\n"
            ");\n"
        )
        assert rule.evaluate([make_artifact("src/components/List.tsx", code)]).passed

    def test_mismatched_nesting_fails(self, rule):
        outcome = rule.evaluate([make_artifact("src/x.ts", "f(a[0)];\n")])

        assert not outcome.passed
        assert "Unexpected ')' on line 1" in outcome.message

    def test_unterminated_template_fails(self, rule):
        outcome = rule.evaluate([make_artifact("src/x.ts", "const s = `abc\n")])

        assert not outcome.passed
        assert "Unterminated template literal" in outcome.message

    def test_sql_line_comments(self, rule):
        code = "-- users (id\nCREATE TABLE users (id uuid primary key);\n"

        migration = make_artifact("supabase/migrations/001.sql", code)

        assert rule.evaluate([migration]).passed

    def test_invalid_python_fails(self, rule):
        outcome = rule.evaluate([make_artifact("main.py", "def f(:\n  pass")])

        assert not outcome.passed

    def test_invalid_json_fails(self, rule):
        outcome = rule.evaluate([make_artifact("package.json", '{"name": ')])

        assert not outcome.passed
        assert "Invalid JSON" in outcome.message

    def test_markdown_ignored(self, rule):
        assert rule.evaluate([make_artifact("NOTES.md", "(((")]).passed

    def test_reports_every_failing_path(self, rule):
        outcome = rule.evaluate(
            [
                make_artifact("a.ts", "{"),
                make_artifact("b.ts", "{}"),
                make_artifact("c.ts", ")"),
            ]
        )

        assert outcome.failing_paths == ("a.ts", "c.ts")

    def test_description_override(self):
        rule = BalancedSyntaxRule(description="Brackets balanced")

        outcome = rule.evaluate([make_artifact("a.ts", "{")])

        assert rule.description == "Brackets balanced"
        assert BalancedSyntaxRule.description == "No syntax errors"
        assert outcome.message.startswith("✗ Brackets balanced")


class TestTypeSoundnessRule:
    """Tests for `any` detection."""

    @pytest.fixture
    def rule(self) -> TypeSoundnessRule:
        return TypeSoundnessRule()

    @pytest.mark.parametrize(
        "code",
        [
            "const x: any = 1;",
            "const y = z as any;",
            "const list: any[] = [];",
            "const w = <any>v;",
        ],
    )
    def test_any_fails(self, rule, code):
        assert not rule.evaluate([make_artifact("src/x.ts", code)]).passed

    def test_typed_code_passes(self, rule):
        code = "const company: string = 'many';\nfunction f(n: number) { return n; }"
        assert rule.evaluate([make_artifact("src/x.ts", code)]).passed

    def test_suppression_allows_any(self, rule):
        code = "// @ts-expect-error legacy\nconst x: any = 1;"
        assert rule.evaluate([make_artifact("src/x.ts", code)]).passed

    def test_javascript_ignored(self, rule):
        assert rule.evaluate([make_artifact("src/x.js", "const x: any = 1;")]).passed


class TestEntryPointRule:
    """Tests for UI unit structure."""

    @pytest.fixture
    def rule(self) -> EntryPointRule:
        return EntryPointRule()

    def test_exported_component_passes(self, rule):
        code = "export default function Card() {\n  return null;\n}\n"
        assert rule.evaluate([make_artifact("src/components/Card.tsx", code)]).passed

    def test_component_without_export_fails(self, rule):
        outcome = rule.evaluate(
            [make_artifact("src/components/Card.tsx", "function Card() {}")]
        )

        assert not outcome.passed
        assert outcome.failing_paths == ("src/components/Card.tsx",)

    def test_python_component_needs_def(self, rule):
        assert rule.evaluate([make_artifact("ui/card.py", "class Card:\n    pass\n")]).passed
        assert not rule.evaluate([make_artifact("ui/card.py", "x = 1\n")]).passed

    def test_non_components_ignored(self, rule):
        artifacts = [
            make_artifact("src/hooks/useAuth.ts", "const x = 1;"),
            make_artifact("src/pages/Home.tsx", "const y = 2;"),
            ArtifactSpec(path="src/Thing.tsx", content="", kind=ArtifactKind.CONFIG),
        ]
        assert rule.evaluate(artifacts).passed
