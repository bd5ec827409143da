"""
Syntactic balance rule.

Pure rule with no I/O. Python artifacts must parse, JSON artifacts must
load, and every other artifact must have properly nested brackets once
string literals and comments are skipped.
"""

import ast
import json

from phaseguard.domain.models import ArtifactSpec
from phaseguard.rules.base import PerArtifactRule

_CLOSING = {"}": "{", ")": "(", "]": "["}
_OPENING = frozenset(_CLOSING.values())


def _line_of(content: str, index: int) -> int:
    return content.count("\n", 0, index) + 1


def _string_end(content: str, start: int, quote: str) -> int:
    """
    Index just past the quote closing the literal opened at `start`.

    Single and double quoted literals cannot span lines; when the line ends
    first, -1 is returned and the quote is taken as plain text (an
    apostrophe in JSX text, for instance).
    """
    i = start + 1
    while i < len(content):
        char = content[i]
        if char == "\\":
            i += 2
            continue
        if char == quote:
            return i + 1
        if char == "\n" and quote != "`":
            return -1
        i += 1
    return -1


def check_nesting(content: str, line_comment: str = "//") -> str | None:
    """
    Check bracket nesting, ignoring strings, templates and comments.

    Returns a description of the first problem found, or None.
    """
    stack: list[tuple[str, int]] = []
    i = 0
    length = len(content)
    while i < length:
        char = content[i]

        if content.startswith(line_comment, i):
            newline = content.find("\n", i)
            i = length if newline == -1 else newline + 1
            continue
        if content.startswith("/*", i):
            end = content.find("*/", i + 2)
            if end == -1:
                return f"Unterminated comment opened on line {_line_of(content, i)}"
            i = end + 2
            continue
        if char in "'\"`":
            end = _string_end(content, i, char)
            if end != -1:
                i = end
                continue
            if char == "`":
                return (
                    "Unterminated template literal opened on line "
                    f"{_line_of(content, i)}"
                )

        if char in _OPENING:
            stack.append((char, i))
        elif char in _CLOSING:
            if not stack or stack[-1][0] != _CLOSING[char]:
                return f"Unexpected '{char}' on line {_line_of(content, i)}"
            stack.pop()
        i += 1

    if stack:
        opening, index = stack[-1]
        return f"Unclosed '{opening}' opened on line {_line_of(content, index)}"
    return None


class BalancedSyntaxRule(PerArtifactRule):
    """
    Validates artifact syntax without executing anything.

    The nesting scan is not a parse: it catches truncated generations,
    which is the failure this rule exists for.
    """

    name = "syntax"
    description = "No syntax errors"

    def applies_to(self, artifact: ArtifactSpec) -> bool:
        return not artifact.path.endswith((".md", ".txt"))

    def check(self, artifact: ArtifactSpec) -> str | None:
        content = artifact.content
        if artifact.path.endswith(".py"):
            try:
                ast.parse(content)
            except SyntaxError as e:
                return f"Syntax error: {e}"
            return None

        if artifact.path.endswith(".json"):
            try:
                json.loads(content)
            except json.JSONDecodeError as e:
                return f"Invalid JSON: {e}"
            return None

        line_comment = "--" if artifact.path.endswith(".sql") else "//"
        return check_nesting(content, line_comment)
