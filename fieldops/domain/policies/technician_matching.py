"""TechnicianMatchingPolicy: greedy least-loaded pick with zone tie-break."""

from __future__ import annotations

from dataclasses import dataclass

from fieldops.domain.entities.technician import Technician
from fieldops.domain.entities.work_order import WorkOrder


@dataclass(frozen=True)
class TechnicianMatch:
    """Result of the matching policy."""

    technician: Technician
    zone_match: bool
    reason: str


def eligible_candidates(order: WorkOrder, technicians: list[Technician]) -> list[Technician]:
    """Technicians with the order's specialty that are currently available.

    Zone is not a filter. The result is ordered by technician id so the
    tie-break below does not depend on registry enumeration order.
    """
    candidates = [
        t for t in technicians
        if t.has_specialty(order.specialty) and t.is_available()
    ]
    return sorted(candidates, key=lambda t: t.id)


def select_technician(order: WorkOrder, technicians: list[Technician]) -> TechnicianMatch | None:
    """Pick the technician for an automatic assignment.

    1. Keep eligible candidates (specialty match, AVAILABLE).
    2. Keep those sharing the minimum current_load.
    3. Prefer the first one in the order's zone, else the first one by id.

    Returns:
        TechnicianMatch, or None when nobody is eligible.
    """
    candidates = eligible_candidates(order, technicians)
    if not candidates:
        return None

    min_load = min(t.current_load for t in candidates)
    tied = [t for t in candidates if t.current_load == min_load]

    same_zone = next((t for t in tied if t.zone == order.zone), None)
    if same_zone is not None:
        return TechnicianMatch(
            technician=same_zone,
            zone_match=True,
            reason=f"Least loaded ({min_load}) in zone {order.zone}",
        )

    chosen = tied[0]
    return TechnicianMatch(
        technician=chosen,
        zone_match=False,
        reason=f"Least loaded ({min_load}), no technician in zone {order.zone}",
    )
