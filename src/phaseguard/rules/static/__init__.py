"""
Static rules - pure content checks with no side effects.

These rules are fast, deterministic, and do not execute code.
"""

from phaseguard.rules.static.imports import ImportResolutionRule
from phaseguard.rules.static.structure import EntryPointRule
from phaseguard.rules.static.syntax import BalancedSyntaxRule
from phaseguard.rules.static.types import TypeSoundnessRule

__all__ = [
    "BalancedSyntaxRule",
    "EntryPointRule",
    "ImportResolutionRule",
    "TypeSoundnessRule",
]
