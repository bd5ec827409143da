"""
Default rule sets per phase role.

Foundation phases check imports and syntax; core phases add type
soundness; feature phases add the entry point check for UI units.
"""

from collections.abc import Mapping, Sequence
from types import MappingProxyType

from phaseguard.domain.interfaces import ValidationRule
from phaseguard.domain.models import PhaseRole
from phaseguard.rules.static import (
    BalancedSyntaxRule,
    EntryPointRule,
    ImportResolutionRule,
    TypeSoundnessRule,
)


def foundation_rules() -> tuple[ValidationRule, ...]:
    return (ImportResolutionRule(), BalancedSyntaxRule())


def core_rules() -> tuple[ValidationRule, ...]:
    return (*foundation_rules(), TypeSoundnessRule())


def feature_rules() -> tuple[ValidationRule, ...]:
    return (*foundation_rules(), EntryPointRule())


def default_rule_sets() -> Mapping[PhaseRole, Sequence[ValidationRule]]:
    """Fresh, read-only mapping of every PhaseRole to its default rules."""
    return MappingProxyType(
        {
            PhaseRole.FOUNDATION: foundation_rules(),
            PhaseRole.CORE: core_rules(),
            PhaseRole.FEATURE: feature_rules(),
        }
    )
