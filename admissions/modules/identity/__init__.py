"""Identity gate and identity value."""

from .gate import ANONYMOUS, IdentityGate
from .models import Identity

__all__ = ["ANONYMOUS", "Identity", "IdentityGate"]
