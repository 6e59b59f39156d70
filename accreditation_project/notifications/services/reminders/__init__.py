"""
Reminder notification service layer.

Time-based reminder emitters triggered by the scheduler (management
command) or by an administrator.

Reminder logic is:
- service-layer only
- date-based, with the reference date passed in
- deduplicated per recipient, type, assignment and day
"""

# =====================================================
# SCHEDULED DEADLINE SCAN
# =====================================================
from .deadline import (
    ReminderRunResult,
    send_deadline_reminders,
)

# =====================================================
# MANUAL (ADMIN-TRIGGERED)
# =====================================================
from .manual import (
    send_manual_reminder,
)

__all__ = [
    "ReminderRunResult",
    "send_deadline_reminders",
    "send_manual_reminder",
]
