from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import List
from decimal import Decimal
from busbooking.models import Agent
from busbooking.auth.schemas import Caller, UserRole
from busbooking.auth.service import UserService
from busbooking.agents.ledger import AgentLedger, to_money
from busbooking.agents.schemas import AgentCreate, AgentDashboard, AgentStats
from busbooking.exceptions import ConflictError, NotFoundError
from busbooking.logger_config import custom_logger

class AgentService:
    """Agent onboarding and administration"""

    def __init__(self, db: Session):
        self.db = db
        self.ledger = AgentLedger(db)

    def create_profile(self, caller: Caller, request: AgentCreate) -> Agent:
        """Register the caller as an agent; approval is granted later by an admin.

        The stored user role is promoted to `agent`, but authorization reads the
        role claim from the bearer token, so agent-only endpoints and commission
        attribution apply once the identity provider issues a token with
        `role=agent`.
        """
        if self.ledger.get_by_user_id(caller.user_id):
            raise ConflictError("Agent profile already exists")

        agent = Agent(
            user_id=caller.user_id,
            commission_rate=to_money(request.commission_rate),
            is_approved=False
        )

        try:
            self.db.add(agent)
            if caller.role != UserRole.ADMIN:
                UserService.set_role(self.db, caller.user_id, UserRole.AGENT.value)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Agent profile already exists")

        self.db.refresh(agent)
        custom_logger.info(f"Agent profile {agent.id} created for user {caller.user_id}")
        return agent

    def get_agents(self) -> List[Agent]:
        """All agents, top earners first"""
        return self.db.query(Agent).order_by(Agent.total_earnings.desc(), Agent.id).all()

    def approve(self, agent_id: int) -> Agent:
        agent = self.ledger.get(agent_id)
        if not agent:
            raise NotFoundError("Agent not found")

        agent.is_approved = True
        self.db.commit()
        self.db.refresh(agent)
        custom_logger.info(f"Agent {agent_id} approved")
        return agent

    def update_commission(self, agent_id: int, commission_rate: Decimal) -> Agent:
        agent = self.ledger.get(agent_id)
        if not agent:
            raise NotFoundError("Agent not found")

        agent.commission_rate = to_money(commission_rate)
        self.db.commit()
        self.db.refresh(agent)
        custom_logger.info(f"Agent {agent_id} commission rate set to {agent.commission_rate}")
        return agent

    def get_dashboard(self, caller: Caller) -> AgentDashboard:
        agent = self.ledger.get_by_user_id(caller.user_id)
        if not agent:
            raise NotFoundError("Agent profile not found")

        # Imported here: the bookings package imports the agent ledger at load time
        from busbooking.bookings.booking_service import BookingEngine
        bookings = BookingEngine(self.db).get_agent_bookings(agent.id)

        return AgentDashboard(
            agent=agent,
            bookings=bookings,
            stats=AgentStats(
                total_bookings=agent.total_bookings,
                total_earnings=agent.total_earnings,
                commission_rate=agent.commission_rate,
                recent_bookings=bookings[:10]
            )
        )
