"""
JSX Prop Lookup - MCP Server for analyzing JSX/React component props.

Provides tools for:
- Component prop declarations (destructured and identifier parameters)
- Prop usage lookup across JSX call sites
- Missing required prop audits
- Criteria queries over prop values (AND/OR, equals/contains, existence)
"""

__version__ = "0.2.0"
