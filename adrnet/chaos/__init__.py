"""
Chaos / Failure Injection Module

Marks links of a topology as FAILED:
- Random disasters over the surviving links
- Targeted single-link outages
"""

from .injector import (
    DisasterInjector,
    DisasterResult,
    RandomSource,
    inject_failures
)

__all__ = [
    'DisasterInjector',
    'DisasterResult',
    'RandomSource',
    'inject_failures'
]
