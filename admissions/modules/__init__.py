"""Feature modules and their public exports."""

from . import applications, health, identity, journey, payments, recovery

__all__ = [
    "applications",
    "health",
    "identity",
    "journey",
    "payments",
    "recovery",
]
