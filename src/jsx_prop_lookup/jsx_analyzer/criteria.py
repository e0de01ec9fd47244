"""
Criteria queries over component instances.

An instance is either a component declaration or a JSX usage site. Sites are
keyed by `(file, line, column)`, so two elements on one line stay separate; a
site replaces a declaration reported on its line (last write), so one logical
instance is never reported twice.
"""

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .errors import CriteriaError
from .models import ComponentDeclaration, Logic, PropCriterion, PropUsage, QueryMatch, UsageSite
from .shaping import pretty_location

VALID_OPERATORS = ("equals", "contains")
VALID_LOGIC = ("AND", "OR")


def js_string(value: object) -> str:
    """Stringify a prop or criterion value the way JSX source would spell it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# ============================================================================
# Validation
# ============================================================================

def validate_query(
    component_name: str,
    criteria: Sequence[PropCriterion | dict],
    logic: str = "AND",
) -> tuple[list[PropCriterion], Logic]:
    """
    Check query arguments before any file is touched.

    Args:
        component_name: Component to query
        criteria: PropCriterion objects or plain dicts
        logic: "AND" or "OR" (case-insensitive)

    Returns:
        Normalized (criteria, logic)

    Raises:
        CriteriaError: Naming the offending field
    """
    if not isinstance(component_name, str) or not component_name.strip():
        raise CriteriaError("component_name", "is required and must be non-empty")

    normalized_logic = logic.upper() if isinstance(logic, str) else logic
    if normalized_logic not in VALID_LOGIC:
        raise CriteriaError("logic", f"must be 'AND' or 'OR', got {logic!r}")

    if criteria is None:
        criteria = []
    if not isinstance(criteria, (list, tuple)):
        raise CriteriaError("prop_criteria", "must be a list")

    normalized: list[PropCriterion] = []
    for i, raw in enumerate(criteria):
        where = f"prop_criteria[{i}]"
        if isinstance(raw, dict):
            criterion = PropCriterion.from_dict(raw)
        elif isinstance(raw, PropCriterion):
            criterion = raw
        else:
            raise CriteriaError(where, f"must be an object with a 'name', got {type(raw).__name__}")

        if not isinstance(criterion.name, str) or not criterion.name:
            raise CriteriaError(f"{where}.name", "is required and must be non-empty")
        if criterion.operator not in VALID_OPERATORS:
            raise CriteriaError(
                f"{where}.operator", f"must be 'equals' or 'contains', got {criterion.operator!r}"
            )
        if criterion.value is not None and not isinstance(criterion.value, (str, int, float, bool)):
            raise CriteriaError(f"{where}.value", "must be a string, number or boolean")
        if criterion.exists is not None and not isinstance(criterion.exists, bool):
            raise CriteriaError(f"{where}.exists", "must be a boolean")
        normalized.append(criterion)

    return normalized, normalized_logic


# ============================================================================
# Evaluation
# ============================================================================

@dataclass
class CriteriaOutcome:
    matches: bool
    matching_props: dict[str, dict] = field(default_factory=dict)
    missing_props: list[str] = field(default_factory=list)


def evaluate_criteria(
    props: dict[str, PropUsage],
    criteria: Sequence[PropCriterion],
    logic: Logic = "AND",
    include_columns: bool = True,
) -> CriteriaOutcome:
    """
    Evaluate criteria against one instance's props.

    Args:
        props: Prop name -> usage (spread entries excluded)
        criteria: Conditions to test
        logic: "AND" (all pass) or "OR" (any passes)
        include_columns: Include columns in matching prop details

    Returns:
        CriteriaOutcome; an empty criteria list always matches
    """
    outcome = CriteriaOutcome(matches=True)
    results: list[bool] = []

    for criterion in criteria:
        usage = props.get(criterion.name)
        present = usage is not None

        if criterion.exists is not None:
            passed = criterion.exists == present
            if not passed and criterion.exists:
                outcome.missing_props.append(criterion.name)
        elif criterion.value is not None and present:
            actual = js_string(usage.value)
            expected = js_string(criterion.value)
            if criterion.operator == "contains":
                passed = expected in actual
            else:
                passed = actual == expected
        elif criterion.value is not None:
            passed = False
            outcome.missing_props.append(criterion.name)
        else:
            passed = present
            if not passed:
                outcome.missing_props.append(criterion.name)

        if passed and present:
            detail: dict = {"value": js_string(usage.value), "line": usage.line}
            if include_columns:
                detail["column"] = usage.column
            outcome.matching_props[criterion.name] = detail

        results.append(passed)

    if results:
        outcome.matches = all(results) if logic == "AND" else any(results)
    return outcome


# ============================================================================
# Instance Merging
# ============================================================================

@dataclass
class ComponentInstance:
    """One logical component instance: a declaration or a JSX site."""
    component_name: str
    file: str
    line: int
    column: int
    props: dict[str, PropUsage]
    has_spread: bool


def _index_props(usages: Iterable[PropUsage]) -> tuple[dict[str, PropUsage], bool]:
    props: dict[str, PropUsage] = {}
    has_spread = False
    for usage in usages:
        if usage.is_spread:
            has_spread = True
            continue
        props[usage.prop_name] = usage
    return props, has_spread


def collect_instances(
    declarations: Iterable[ComponentDeclaration],
    sites: Iterable[UsageSite],
    component_name: str,
) -> list[ComponentInstance]:
    """Merge declarations and JSX sites of one component.

    Sites are keyed by (file, line, column) so elements sharing a line stay
    separate instances. A site replaces a declaration reported on its line.
    """
    instances: dict[tuple[str, int, int], ComponentInstance] = {}

    for decl in declarations:
        if decl.component_name != component_name:
            continue
        props, has_spread = _index_props(decl.props)
        instances[(decl.file, decl.line, -1)] = ComponentInstance(
            decl.component_name, decl.file, decl.line, decl.column, props, has_spread
        )

    for site in sites:
        if not site.matches(component_name):
            continue
        instances.pop((site.file, site.line, -1), None)
        props, has_spread = _index_props(site.props)
        instances[(site.file, site.line, site.column)] = ComponentInstance(
            site.component_name, site.file, site.line, site.column, props, has_spread
        )

    return [instances[key] for key in sorted(instances)]


def build_matches(
    declarations: Iterable[ComponentDeclaration],
    sites: Iterable[UsageSite],
    component_name: str,
    criteria: Sequence[PropCriterion],
    logic: Logic = "AND",
    *,
    include_columns: bool = True,
    include_pretty_paths: bool = False,
) -> list[QueryMatch]:
    """
    Evaluate criteria over every instance of a component.

    Returns:
        Matches sorted by (file, line, column)
    """
    matches: list[QueryMatch] = []

    for instance in collect_instances(declarations, sites, component_name):
        outcome = evaluate_criteria(instance.props, criteria, logic, include_columns)
        if not outcome.matches:
            continue
        matches.append(QueryMatch(
            component_name=instance.component_name,
            file=instance.file,
            line=instance.line,
            column=instance.column if include_columns else None,
            matching_props=outcome.matching_props,
            missing_props=outcome.missing_props,
            all_props={name: js_string(u.value) for name, u in instance.props.items()},
            has_spread=instance.has_spread,
            pretty_path=pretty_location(instance.file, instance.line) if include_pretty_paths else None,
        ))

    return matches
