from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from busbooking.database import get_db
from busbooking.auth.utils import verify_token
from busbooking.auth.service import UserService
from busbooking.auth.schemas import Caller, UserRole

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")

def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> Caller:
    """Resolve the bearer token into a verified caller identity"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    token_data = verify_token(token, credentials_exception)

    try:
        role = UserRole(token_data["role"])
    except ValueError:
        raise credentials_exception

    # User must still exist and be active
    user = UserService.get_user_by_id(db, user_id=token_data["user_id"])
    if user is None or not user.is_active:
        raise credentials_exception

    return Caller(user_id=user.id, role=role)

def require_roles(*roles: UserRole):
    """Build a dependency that only lets the given roles through"""
    def checker(current_user: Caller = Depends(get_current_user)) -> Caller:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Forbidden: Insufficient permissions"
            )
        return current_user
    return checker

require_admin = require_roles(UserRole.ADMIN)
