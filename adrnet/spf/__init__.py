"""
SPF Module

Dijkstra-based rerouting over the surviving (ACTIVE) links.
"""

from .router import Route, RouteFailure, Router, route

__all__ = [
    'Route',
    'RouteFailure',
    'Router',
    'route'
]
