"""Order status vocabularies and the single mapping between them.

The ledger vocabulary is what gets stored and shown on the tracking page.
The workflow vocabulary is the lowercase set used by the admin dashboard
buttons. Nothing else should re-derive this mapping.
"""

from __future__ import annotations

PENDING = "Pending"
PREPARING = "Preparing"
OUT_FOR_DELIVERY = "Out for Delivery"
COMPLETED = "Completed"
CANCELLED = "Cancelled"

# Order matters: it drives the progress bar on the tracking page
LEDGER_STATUSES: tuple[str, ...] = (PENDING, PREPARING, OUT_FOR_DELIVERY, COMPLETED, CANCELLED)
STATUS_CHOICES = [(s, s) for s in LEDGER_STATUSES]

WORKFLOW_STATUSES: tuple[str, ...] = ("pending", "confirmed", "preparing", "ready", "delivered", "cancelled")

WORKFLOW_TO_LEDGER: dict[str, str] = {
    "pending": PENDING,
    "confirmed": PREPARING,
    "preparing": PREPARING,
    "ready": OUT_FOR_DELIVERY,
    "delivered": COMPLETED,
    "cancelled": CANCELLED,
}

COLOR_CLASSES: dict[str, str] = {
    "pending": "pending",
    "confirmed": "in-progress",
    "preparing": "in-progress",
    "ready": "ready",
    "out for delivery": "ready",
    "delivered": "completed",
    "completed": "completed",
    "cancelled": "cancelled",
}
UNKNOWN = "unknown"


def to_ledger_status(workflow_status: str) -> str:
    """Map a workflow status onto the ledger vocabulary; unmapped values pass through."""
    return WORKFLOW_TO_LEDGER.get(workflow_status, workflow_status)


def color_class_for(status) -> str:
    if not isinstance(status, str):
        return UNKNOWN
    return COLOR_CLASSES.get(status.strip().lower(), UNKNOWN)


def is_valid_ledger_status(status) -> bool:
    return status in LEDGER_STATUSES


def progress_steps(status: str, *, pickup: bool = False) -> list[dict]:
    """Tracking-page steps; display only, transitions are not restricted by it."""
    labels = [PENDING, PREPARING, "Ready for Pickup" if pickup else OUT_FOR_DELIVERY, COMPLETED]
    try:
        reached = LEDGER_STATUSES.index(status)
    except ValueError:
        reached = -1
    if status == CANCELLED:
        reached = -1
    return [
        {"label": label, "done": idx <= reached, "current": idx == reached}
        for idx, label in enumerate(labels)
    ]
