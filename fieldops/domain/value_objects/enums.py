"""Domain enums: pure Python, no external dependencies."""

from enum import Enum


class Availability(str, Enum):
    AVAILABLE = "available"
    BUSY = "busy"
    OFFLINE = "offline"


class OrderStatus(str, Enum):
    PENDING = "pending"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Role(str, Enum):
    SUPERVISOR = "supervisor"
    TECHNICIAN = "technician"
    ADMIN = "admin"


class NotificationChannel(str, Enum):
    EMAIL = "email"
    SMS = "sms"


class LoginState(str, Enum):
    CLEAR = "clear"
    WARNED = "warned"
    LOCKED = "locked"
