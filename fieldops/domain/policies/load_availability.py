"""LoadAvailabilityPolicy: availability as a function of current load."""

from fieldops.domain.value_objects.enums import Availability

DEFAULT_SATURATION_THRESHOLD = 3


def derive_availability(
    current_load: int,
    current: Availability,
    threshold: int = DEFAULT_SATURATION_THRESHOLD,
) -> Availability:
    """Pure function: availability after a load change.

    Business rules, in order:
      1. load >= threshold  →  BUSY, whatever the previous state.
      2. OFFLINE below the threshold stays OFFLINE (set by the technician).
      3. otherwise          →  AVAILABLE.
    """
    if current_load >= threshold:
        return Availability.BUSY
    if current == Availability.OFFLINE:
        return Availability.OFFLINE
    return Availability.AVAILABLE
