"""
Analysis Module

Failure-aware connectivity analysis of a topology.
"""

from .connectivity import (
    active_graph,
    count_components,
    components,
    same_component
)

__all__ = [
    'active_graph',
    'count_components',
    'components',
    'same_component'
]
