"""
Channel senders.

Each sender attempts exactly one delivery of one Notification and
returns a DeliveryOutcome. Retrying is left to the queue.
"""

from .email import deliver_email
from .whatsapp import deliver_whatsapp, normalize_phone_number

__all__ = [
    "deliver_email",
    "deliver_whatsapp",
    "normalize_phone_number",
]
