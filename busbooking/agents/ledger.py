"""
Agent commission ledger.

Earnings and booking counts are adjusted with SQL-side arithmetic so that
concurrent bookings by the same agent never lose an increment. Like the
inventory store, the ledger never commits; the booking engine does.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from busbooking.exceptions import NotFoundError
from busbooking.logger_config import custom_logger
from busbooking.models import Agent

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value) -> Decimal:
    """Quantize to 2 decimal places using half-up rounding"""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


class AgentLedger:
    def __init__(self, db: Session):
        self.db = db

    def get(self, agent_id: int) -> Optional[Agent]:
        return self.db.get(Agent, agent_id)

    def get_by_user_id(self, user_id: int) -> Optional[Agent]:
        return self.db.query(Agent).filter(Agent.user_id == user_id).first()

    @staticmethod
    def is_eligible_for_commission(agent: Optional[Agent]) -> bool:
        return bool(agent is not None and agent.is_approved)

    @classmethod
    def compute_commission(cls, total_amount, agent: Optional[Agent]) -> Decimal:
        """round(total * rate / 100, 2), or 0.00 for agents that are not approved"""
        if not cls.is_eligible_for_commission(agent):
            return ZERO
        rate = Decimal(str(agent.commission_rate))
        return to_money(Decimal(str(total_amount)) * rate / Decimal("100"))

    def record_booking(self, agent_id: int, commission_amount) -> None:
        commission = to_money(commission_amount)
        result = self.db.execute(
            update(Agent)
            .where(Agent.id == agent_id)
            .values(
                total_bookings=Agent.total_bookings + 1,
                total_earnings=Agent.total_earnings + commission,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFoundError("Agent not found")
        custom_logger.info(f"Agent {agent_id}: +1 booking, +{commission} commission")

    def reverse_booking(self, agent_id: int, commission_amount) -> None:
        commission = to_money(commission_amount)
        result = self.db.execute(
            update(Agent)
            .where(Agent.id == agent_id)
            .values(
                total_bookings=Agent.total_bookings - 1,
                total_earnings=Agent.total_earnings - commission,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFoundError("Agent not found")
        custom_logger.info(f"Agent {agent_id}: -1 booking, -{commission} commission")
