from .constraints import SlotConstraints, check_service_radius, resolve_constraints
from .engine import compute_available_slots
from .gaps import Gap, GapPlan, build_gaps
from .scanner import scan_gaps
from .windows import derive_open_windows

__all__ = [
    "Gap",
    "GapPlan",
    "SlotConstraints",
    "build_gaps",
    "check_service_radius",
    "compute_available_slots",
    "derive_open_windows",
    "resolve_constraints",
    "scan_gaps",
]
