"""
MCP Tools for JSX Prop Lookup.

Modules:
- props: Component declarations, prop usage, missing-prop audits and criteria queries
"""

from . import props

__all__ = ["props"]
