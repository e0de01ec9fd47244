"""
Missing required prop detection over JSX usage sites.
"""

from typing import Iterable

from .models import SPREAD_PROP, MissingPropReport, MissingPropUsage, UsageSite


def find_missing_props(
    sites: Iterable[UsageSite],
    component_name: str,
    required_prop: str,
    *,
    assume_spread_satisfies: bool = True,
) -> MissingPropReport:
    """
    Flag every instance of a component that does not pass a required prop.

    A spread attribute (`{...cfg}`) may inject anything, so by default it
    counts as satisfying the requirement. The percentage is taken over all
    matching instances, not only the missing ones.

    Args:
        sites: JSX usage sites to scan
        component_name: Full (`UI.Select`) or local (`Select`) component name
        required_prop: Prop every instance should carry
        assume_spread_satisfies: Treat spread attributes as supplying the prop

    Returns:
        MissingPropReport with the missing instances and instance totals
    """
    report = MissingPropReport(component_name=component_name, required_prop=required_prop)

    for site in sites:
        if not site.matches(component_name):
            continue
        report.total_instances += 1

        names = [SPREAD_PROP if p.is_spread else p.prop_name for p in site.props]
        if required_prop in names:
            continue
        if assume_spread_satisfies and site.has_spread:
            continue

        report.missing.append(MissingPropUsage(
            component_name=site.component_name,
            file=site.file,
            line=site.line,
            column=site.column,
            existing_props=tuple(names),
        ))

    return report
