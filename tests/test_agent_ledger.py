"""
Unit tests for AgentLedger

1. commission = round(total * rate / 100, 2) half-up, only for approved agents
2. record/reverse adjust earnings and booking counts with SQL-side arithmetic
"""

from decimal import Decimal

import pytest

from busbooking.agents.ledger import AgentLedger, to_money
from busbooking.exceptions import NotFoundError
from busbooking.models import Agent


class TestComputeCommission:
    def test_approved_agent_earns_rate_percentage(self):
        agent = Agent(commission_rate="8.00", is_approved=True)

        assert AgentLedger.compute_commission(Decimal("100.00"), agent) == Decimal("8.00")

    def test_unapproved_agent_earns_nothing(self):
        agent = Agent(commission_rate="8.00", is_approved=False)

        assert AgentLedger.compute_commission(Decimal("100.00"), agent) == Decimal("0.00")

    def test_no_agent_earns_nothing(self):
        assert AgentLedger.compute_commission(Decimal("100.00"), None) == Decimal("0.00")

    @pytest.mark.parametrize(
        "total, rate, expected",
        [
            ("10.50", "5.00", "0.53"),  # 0.525 rounds half up
            ("90.00", "7.50", "6.75"),
            ("33.33", "8.00", "2.67"),  # 2.6664
            ("45.00", "0.00", "0.00"),
        ],
    )
    def test_rounds_half_up_to_cents(self, total, rate, expected):
        agent = Agent(commission_rate=rate, is_approved=True)

        assert AgentLedger.compute_commission(Decimal(total), agent) == Decimal(expected)

    def test_eligibility_follows_approval(self):
        assert AgentLedger.is_eligible_for_commission(Agent(is_approved=True))
        assert not AgentLedger.is_eligible_for_commission(Agent(is_approved=False))
        assert not AgentLedger.is_eligible_for_commission(None)

    def test_to_money_quantizes(self):
        assert to_money("2.005") == Decimal("2.01")
        assert to_money(3) == Decimal("3.00")


class TestLedgerCounters:
    def test_record_booking_increments_counters(self, db, make_agent, agent_state):
        caller = make_agent()
        ledger = AgentLedger(db)
        agent_id = ledger.get_by_user_id(caller.user_id).id

        ledger.record_booking(agent_id, Decimal("7.20"))
        ledger.record_booking(agent_id, Decimal("2.40"))
        db.commit()

        agent = agent_state(caller.user_id)
        assert agent.total_bookings == 2
        assert agent.total_earnings == Decimal("9.60")

    def test_reverse_booking_is_the_inverse(self, db, make_agent, agent_state):
        caller = make_agent()
        ledger = AgentLedger(db)
        agent_id = ledger.get_by_user_id(caller.user_id).id

        ledger.record_booking(agent_id, Decimal("7.20"))
        db.commit()
        ledger.reverse_booking(agent_id, Decimal("7.20"))
        db.commit()

        agent = agent_state(caller.user_id)
        assert agent.total_bookings == 0
        assert agent.total_earnings == Decimal("0.00")

    def test_unknown_agent(self, db):
        with pytest.raises(NotFoundError):
            AgentLedger(db).record_booking(999, Decimal("1.00"))

    def test_get_by_user_id_returns_none_for_customers(self, db, make_user):
        caller = make_user()

        assert AgentLedger(db).get_by_user_id(caller.user_id) is None
