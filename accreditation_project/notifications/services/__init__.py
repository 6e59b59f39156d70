"""
Notification service layer.

Functions here create Notification records and request their
delivery. They never decide who may *see* a notification; that is
handled by the read API, which always scopes to the current user.
"""

# =====================================================
# DISPATCH
# =====================================================
from .dispatch import (
    send_to_user,
    send_to_unit,
    send_broadcast,
    send_deadline_reminder,
    send_document_rejected,
    send_evaluation_incomplete,
    send_accreditation_schedule,
    send_policy_update,
)

# =====================================================
# RECIPIENTS
# =====================================================
from .recipients import (
    IndividualTarget,
    UnitTarget,
    resolve_recipients,
)

# =====================================================
# REMINDERS
# =====================================================
from .reminders import (
    ReminderRunResult,
    send_deadline_reminders,
    send_manual_reminder,
)

__all__ = [
    # Dispatch
    "send_to_user",
    "send_to_unit",
    "send_broadcast",
    "send_deadline_reminder",
    "send_document_rejected",
    "send_evaluation_incomplete",
    "send_accreditation_schedule",
    "send_policy_update",

    # Recipients
    "IndividualTarget",
    "UnitTarget",
    "resolve_recipients",

    # Reminders
    "ReminderRunResult",
    "send_deadline_reminders",
    "send_manual_reminder",
]
