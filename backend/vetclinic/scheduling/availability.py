"""
Day availability for booking UIs.

Lists each start on the clinic's hourly grid for one date and whether it can
still be booked, mirroring the validator's window, overlap and capacity rules.
"""

from datetime import date
from typing import Any, Dict

from vetclinic.db.visit_store import VisitStore
from vetclinic.scheduling.capacity import capacity_reached, remaining_capacity
from vetclinic.scheduling.overlap import slot_end
from vetclinic.scheduling.rules import ClinicRules


def describe_day(store: VisitStore, rules: ClinicRules, visit_date: date) -> Dict[str, Any]:
    """
    Returns:
        dict: {
            "visit_date": date,
            "booked": int,
            "capacity_remaining": int,
            "slots": [{"start": time, "end": time, "is_available": bool}, ...]
        }
    """
    booked = store.count_visits_on_date(visit_date)
    day_open = visit_date <= rules.last_operating_date and not capacity_reached(booked, rules.daily_capacity)

    slots = []
    for start in rules.bookable_starts():
        end = slot_end(start)
        taken = store.find_overlapping_visit(visit_date, start, end)
        slots.append({"start": start, "end": end, "is_available": day_open and not taken})

    return {
        "visit_date": visit_date,
        "booked": booked,
        "capacity_remaining": remaining_capacity(booked, rules.daily_capacity),
        "slots": slots,
    }
