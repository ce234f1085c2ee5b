from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from busbooking.database import get_db
from busbooking.auth import Caller, UserRole, get_current_user, require_admin, require_roles
from busbooking.agents.schemas import Agent, AgentCreate, AgentDashboard, CommissionUpdate
from busbooking.agents.service import AgentService

router = APIRouter()

@router.get("/", response_model=List[Agent])
def get_agents(
    current_user: Caller = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Get all agents (admin only)"""
    return AgentService(db).get_agents()

@router.get("/dashboard", response_model=AgentDashboard)
def get_agent_dashboard(
    current_user: Caller = Depends(require_roles(UserRole.AGENT, UserRole.ADMIN)),
    db: Session = Depends(get_db)
):
    """Get the caller's agent profile, bookings and earnings"""
    return AgentService(db).get_dashboard(current_user)

@router.post("/", response_model=Agent, status_code=status.HTTP_201_CREATED)
def create_agent_profile(
    request: AgentCreate,
    current_user: Caller = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Register the caller as an agent"""
    return AgentService(db).create_profile(current_user, request)

@router.patch("/{agent_id}/approve", response_model=Agent)
def approve_agent(
    agent_id: int,
    current_user: Caller = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Approve agent (admin only)"""
    return AgentService(db).approve(agent_id)

@router.patch("/{agent_id}/commission", response_model=Agent)
def update_agent_commission(
    agent_id: int,
    request: CommissionUpdate,
    current_user: Caller = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Update agent commission rate (admin only)"""
    return AgentService(db).update_commission(agent_id, request.commission_rate)
