from sqlalchemy.orm import Session
from typing import Optional
from busbooking.models import User

class UserService:
    @staticmethod
    def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
        """Get user by ID"""
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def set_role(db: Session, user_id: int, role: str) -> Optional[User]:
        """Change a user's role; caller commits"""
        user = UserService.get_user_by_id(db, user_id)
        if user:
            user.role = role
        return user
