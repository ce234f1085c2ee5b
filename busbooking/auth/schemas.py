from pydantic import BaseModel
from enum import Enum

class UserRole(str, Enum):
    """Caller role claim issued by the identity provider"""
    CUSTOMER = "customer"
    AGENT = "agent"
    ADMIN = "admin"

class Caller(BaseModel):
    """Verified identity of the caller of a booking operation"""
    user_id: int
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_agent(self) -> bool:
        return self.role == UserRole.AGENT

