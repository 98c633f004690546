"""Domain errors raised by the assignment and login use cases.

Routers translate these into HTTP responses; the use cases never swallow them.
"""

from __future__ import annotations


class DispatchError(Exception):
    """Base class for every business error of the service."""


class OrderNotFound(DispatchError):
    def __init__(self, order_id: str):
        super().__init__(f"Work order not found: {order_id}")
        self.order_id = order_id


class TechnicianNotFound(DispatchError):
    def __init__(self, technician_id: str):
        super().__init__(f"Technician not found: {technician_id}")
        self.technician_id = technician_id


class NoAvailableTechnician(DispatchError):
    """No technician satisfies the matching policy right now.

    An expected outcome: the order stays pending and may be retried later.
    """

    def __init__(self, order_id: str, specialty: str):
        super().__init__(
            f"No technicians meet the criteria for order {order_id} (specialty={specialty})"
        )
        self.order_id = order_id
        self.specialty = specialty


class InvalidState(DispatchError):
    def __init__(self, order_id: str, status: str, expected: str):
        super().__init__(
            f"Work order {order_id} is '{status}', expected '{expected}'"
        )
        self.order_id = order_id
        self.status = status
        self.expected = expected


class InvalidCredentials(DispatchError):
    def __init__(self, attempts_remaining: int):
        super().__init__(
            f"Invalid credentials, {attempts_remaining} attempt(s) remaining"
        )
        self.attempts_remaining = attempts_remaining


class AccountLocked(DispatchError):
    def __init__(self, minutes_remaining: int):
        super().__init__(
            f"Account locked, try again in {minutes_remaining} minute(s)"
        )
        self.minutes_remaining = minutes_remaining


class UsernameTaken(DispatchError):
    def __init__(self, username: str):
        super().__init__(f"User with username '{username}' already exists")
        self.username = username
