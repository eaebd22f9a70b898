import enum
from sqlalchemy import Column, String, DateTime, func, Boolean, Integer, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import relationship

from core.database import Base

class UserRole(str, enum.Enum):
    MANAGER = "Manager"
    STUDENT = "Student"

class User(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    first_name = Column(String(50), nullable=True)
    last_name = Column(String(50), nullable=True)
    hashed_password = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), server_default=func.now(), nullable=False)

    roles = relationship(
        "UserRoleAssignment",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="UserRoleAssignment.user_role_id",
    )
    refresh_tokens = relationship("RefreshToken", back_populates="user", cascade="all, delete-orphan")

class UserRoleAssignment(Base):
    """
    사용자에게 부여된 역할
    """
    __tablename__ = "user_roles"

    user_role_id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(SAEnum(UserRole, name="user_role_enum"), nullable=False)

    user = relationship("User", back_populates="roles")
