"""
Caller identity.

Tokens are issued by an external identity provider; this package only verifies
them and exposes the `(user_id, role)` pair the booking core needs.
"""

from .schemas import Caller, UserRole
from .dependencies import get_current_user, require_roles, require_admin

__all__ = ["Caller", "UserRole", "get_current_user", "require_roles", "require_admin"]
