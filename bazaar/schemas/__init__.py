"""Shared API view models."""
from bazaar.schemas.business import (
    BusinessView,
    CategoryRef,
    DayHours,
    DetailedHours,
    FullBusinessView,
    LocationRef,
    PublicBusinessView,
    SimpleHours,
    WorkingHours,
    dump_working_hours,
    load_view,
    parse_working_hours,
)

__all__ = [
    "BusinessView",
    "CategoryRef",
    "DayHours",
    "DetailedHours",
    "FullBusinessView",
    "LocationRef",
    "PublicBusinessView",
    "SimpleHours",
    "WorkingHours",
    "dump_working_hours",
    "load_view",
    "parse_working_hours",
]
