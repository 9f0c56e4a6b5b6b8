from store.layout_store import LayoutStore
from store.reservation_store import ReservationStore, parse_deposit
from store.availability import candidate_interval, find_available, free_windows, has_conflict
from store.planner import FacilityPlanner, parse_date, parse_start

__all__ = [
    "LayoutStore",
    "ReservationStore",
    "parse_deposit",
    "candidate_interval",
    "find_available",
    "free_windows",
    "has_conflict",
    "FacilityPlanner",
    "parse_date",
    "parse_start",
]
