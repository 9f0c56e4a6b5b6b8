from models.errors import PlannerError, InvalidInterval, InvalidInput, Conflict, NotFound
from models.interval import Interval, intervals_overlap
from models.element import Court, Zone, Element
from models.reservation import Reservation
from models.facility import FacilityData

__all__ = [
    "PlannerError",
    "InvalidInterval",
    "InvalidInput",
    "Conflict",
    "NotFound",
    "Interval",
    "intervals_overlap",
    "Court",
    "Zone",
    "Element",
    "Reservation",
    "FacilityData",
]
