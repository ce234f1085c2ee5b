"""
Travel agents and their commission ledger.

- ledger.py: AgentLedger, commission computation and atomic earnings counters
- service.py: agent onboarding, approval and dashboard
- router.py: FastAPI endpoints for agent management
"""

from .router import router
from .ledger import AgentLedger
from .service import AgentService
from .schemas import Agent, AgentCreate, AgentDashboard, CommissionUpdate

__all__ = ["router", "AgentLedger", "AgentService", "Agent", "AgentCreate", "AgentDashboard", "CommissionUpdate"]
