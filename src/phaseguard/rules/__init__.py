"""
Validation rules for phase gates.

Rules are deterministic predicates over a phase's artifact set. They can
be composed using CompositeRule for layered validation.

Organization:
- static/: Pure content checks (no execution)
- composite/: Rule composition patterns
- rulesets: Default rules per phase role
"""

from phaseguard.rules.base import PerArtifactRule
from phaseguard.rules.composite import CompositeRule
from phaseguard.rules.rulesets import (
    core_rules,
    default_rule_sets,
    feature_rules,
    foundation_rules,
)
from phaseguard.rules.static import (
    BalancedSyntaxRule,
    EntryPointRule,
    ImportResolutionRule,
    TypeSoundnessRule,
)

__all__ = [
    # Static rules (pure, fast)
    "BalancedSyntaxRule",
    "EntryPointRule",
    "ImportResolutionRule",
    "TypeSoundnessRule",
    # Composition
    "CompositeRule",
    "PerArtifactRule",
    # Rule sets
    "core_rules",
    "default_rule_sets",
    "feature_rules",
    "foundation_rules",
]
