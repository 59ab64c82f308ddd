"""Backend health monitoring."""

from .models import HealthSnapshot, HealthStatus
from .monitor import HealthMonitor
from .probe import HealthProbe

__all__ = ["HealthMonitor", "HealthProbe", "HealthSnapshot", "HealthStatus"]
