"""
Recipient targets.

An assignment points at either one assessor or a whole unit. Both are
resolved to a flat list of users in one place so the reminder and
overdue paths share the same expansion.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class IndividualTarget:
    user: object


@dataclass(frozen=True)
class UnitTarget:
    unit: object


def target_for_assignment(assignment):
    """Unit-targeted assignments take precedence over the assessor."""
    if assignment.unit_id:
        return UnitTarget(assignment.unit)
    if assignment.assessor_id:
        return IndividualTarget(assignment.assessor)
    return None


def resolve_recipients(target):
    if target is None:
        return []

    if isinstance(target, UnitTarget):
        return list(target.unit.users_with_roles())

    if isinstance(target, IndividualTarget):
        return [target.user] if target.user is not None else []

    raise TypeError(f"Unsupported recipient target: {target!r}")
