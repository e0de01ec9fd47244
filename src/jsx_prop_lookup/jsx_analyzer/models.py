"""
Data classes shared by the extractor, the query evaluator and the shapers.

All entities are produced fresh per analysis call. Prop usages and usage
sites are frozen once built; declarations are filled in while their function
node is being walked and are not touched afterwards.
"""

from dataclasses import dataclass, field
from typing import Literal

# Sentinel prop names for opaque prop bags.
REST_PROP = "...rest"
SPREAD_PROP = "...spread"

ResponseFormat = Literal["full", "compact", "minimal"]
Operator = Literal["equals", "contains"]
Logic = Literal["AND", "OR"]


# ============================================================================
# Extraction Results
# ============================================================================

@dataclass(frozen=True)
class PropUsage:
    """One occurrence of a prop: a declared parameter field or a JSX attribute."""
    prop_name: str
    component_name: str
    file: str
    line: int
    column: int
    value: str | None = None
    is_spread: bool = False
    type: str | None = None

    def to_dict(self, include_columns: bool = True) -> dict:
        """Convert to dictionary for JSON serialization."""
        data: dict = {
            "prop_name": self.prop_name,
            "component_name": self.component_name,
            "file": self.file,
            "line": self.line,
        }
        if include_columns:
            data["column"] = self.column
        if self.value is not None:
            data["value"] = self.value
        if self.is_spread:
            data["is_spread"] = True
        if self.type is not None:
            data["type"] = self.type
        return data


@dataclass
class ComponentDeclaration:
    """A function or closure treated as a component definition."""
    component_name: str
    file: str
    line: int
    column: int
    props: list[PropUsage] = field(default_factory=list)
    props_interface: str | None = None

    @property
    def prop_names(self) -> list[str]:
        return [p.prop_name for p in self.props]

    def to_dict(self, include_columns: bool = True) -> dict:
        """Convert to dictionary for JSON serialization."""
        data: dict = {
            "component_name": self.component_name,
            "file": self.file,
            "line": self.line,
        }
        if include_columns:
            data["column"] = self.column
        data["props"] = [p.to_dict(include_columns) for p in self.props]
        if self.props_interface:
            data["props_interface"] = self.props_interface
        return data


@dataclass(frozen=True)
class UsageSite:
    """One JSX element invoking a component, with every attribute it supplies.

    `component_name` is the full (possibly dotted) element name and
    `local_name` its last segment. `props` is never narrowed by a prop filter,
    so instance counting stays correct when callers only want one prop.
    """
    component_name: str
    local_name: str
    file: str
    line: int
    column: int
    props: tuple[PropUsage, ...] = ()

    @property
    def has_spread(self) -> bool:
        return any(p.is_spread for p in self.props)

    def matches(self, name: str) -> bool:
        """Whether a caller-supplied component name refers to this element."""
        return name == self.component_name or name == self.local_name


@dataclass(frozen=True)
class PropsInterface:
    """A `<Name>Props` interface or type alias found in one file."""
    name: str
    component_name: str
    prop_types: dict[str, str] = field(default_factory=dict)


@dataclass
class FileAnalysis:
    """Everything one file contributes to an analysis run."""
    file: str
    declarations: list[ComponentDeclaration] = field(default_factory=list)
    usages: list[PropUsage] = field(default_factory=list)
    sites: list[UsageSite] = field(default_factory=list)
    interfaces: dict[str, PropsInterface] = field(default_factory=dict)


@dataclass
class AnalysisResult:
    """Canonical (full) result of an analysis run, before shaping."""
    files_analyzed: int = 0
    files_skipped: int = 0
    components: list[ComponentDeclaration] = field(default_factory=list)
    prop_usages: list[PropUsage] = field(default_factory=list)
    sites: list[UsageSite] = field(default_factory=list)

    @property
    def files_scanned(self) -> list[str]:
        """Distinct files that contributed a declaration or a usage."""
        seen: dict[str, None] = {}
        for comp in self.components:
            seen.setdefault(comp.file, None)
        for usage in self.prop_usages:
            seen.setdefault(usage.file, None)
        return list(seen)


# ============================================================================
# Queries
# ============================================================================

@dataclass(frozen=True)
class PropCriterion:
    """A single condition on one prop's presence or value."""
    name: str
    value: str | int | float | bool | None = None
    operator: Operator = "equals"
    exists: bool | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "PropCriterion":
        return cls(
            name=data.get("name", ""),
            value=data.get("value"),
            operator=data.get("operator") or "equals",
            exists=data.get("exists"),
        )

    def to_dict(self) -> dict:
        data: dict = {"name": self.name, "operator": self.operator}
        if self.value is not None:
            data["value"] = self.value
        if self.exists is not None:
            data["exists"] = self.exists
        return data


@dataclass
class QueryMatch:
    """One component instance (declaration or JSX site) that passed a query."""
    component_name: str
    file: str
    line: int
    column: int | None = None
    matching_props: dict[str, dict] = field(default_factory=dict)
    missing_props: list[str] = field(default_factory=list)
    all_props: dict[str, str] = field(default_factory=dict)
    has_spread: bool = False
    pretty_path: str | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        data: dict = {
            "component_name": self.component_name,
            "file": self.file,
            "line": self.line,
        }
        if self.column is not None:
            data["column"] = self.column
        if self.pretty_path is not None:
            data["pretty_path"] = self.pretty_path
        data["matching_props"] = self.matching_props
        if self.missing_props:
            data["missing_props"] = self.missing_props
        data["all_props"] = self.all_props
        if self.has_spread:
            data["has_spread"] = True
        return data


# ============================================================================
# Missing Prop Audit
# ============================================================================

@dataclass(frozen=True)
class MissingPropUsage:
    """A JSX instance lacking the required prop."""
    component_name: str
    file: str
    line: int
    column: int
    existing_props: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "component_name": self.component_name,
            "file": self.file,
            "line": self.line,
            "column": self.column,
            "existing_props": list(self.existing_props),
        }


@dataclass
class MissingPropReport:
    """Result of a missing-prop audit over every matching instance."""
    component_name: str
    required_prop: str
    missing: list[MissingPropUsage] = field(default_factory=list)
    total_instances: int = 0

    @property
    def missing_prop_count(self) -> int:
        return len(self.missing)

    @property
    def missing_prop_percentage(self) -> float:
        if self.total_instances == 0:
            return 0
        return round(self.missing_prop_count / self.total_instances * 100, 2)

    def to_dict(self) -> dict:
        return {
            "component_name": self.component_name,
            "required_prop": self.required_prop,
            "missing_prop_usages": [m.to_dict() for m in self.missing],
            "summary": {
                "total_instances": self.total_instances,
                "missing_prop_count": self.missing_prop_count,
                "missing_prop_percentage": self.missing_prop_percentage,
            },
        }
