"""QA summary: correlates programme events with their schedule slots."""

import logging
from typing import Dict, List

from utxo_spec.models import (
    Entry,
    EventItem,
    IntegrityViolation,
    QASummaryItem,
    ScheduleItem,
)

logger = logging.getLogger("utxo_spec.qa")

LIGHTNING: str = "lightning"


def qa_summary(entry: Entry) -> List[QASummaryItem]:
    """Pair every non-lightning event of *entry* with its schedule slot.

    The output follows the order of the ``events`` document. When several
    schedule slots reference the same event, the first one in the
    ``schedule`` document is used and a warning is logged.

    Raises:
        IntegrityViolation: If ``events`` or ``schedule`` is not loaded, or a
            non-lightning event has no schedule slot.
    """
    for required in ("events", "schedule"):
        if required not in entry.specs:
            raise IntegrityViolation(
                f"Entry {entry.entry_id}: QA summary requires the "
                f"{required!r} sub-spec"
            )

    events: List[EventItem] = entry.specs["events"]
    schedule: List[ScheduleItem] = entry.specs["schedule"]

    slots: Dict[str, List[ScheduleItem]] = {}
    for slot in schedule:
        if slot.event is not None:
            slots.setdefault(slot.event, []).append(slot)

    summary: List[QASummaryItem] = []
    for ev in events:
        if ev.type == LIGHTNING:
            continue
        matches = slots.get(ev.id)
        if not matches:
            raise IntegrityViolation(f"Schedule not found: {ev.id}")
        if len(matches) > 1:
            logger.warning(
                "Entry %s: event %s has %d schedule slots (%s), using %s",
                entry.entry_id,
                ev.id,
                len(matches),
                ", ".join(m.id for m in matches),
                matches[0].id,
            )
        slot = matches[0]
        summary.append(
            QASummaryItem(id=slot.id, event_id=ev.id, name=ev.name, period=slot.period)
        )
    return summary
