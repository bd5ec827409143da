"""
Composite rules - composition patterns for combining rules.
"""

from phaseguard.rules.composite.base import CompositeRule

__all__ = [
    "CompositeRule",
]
