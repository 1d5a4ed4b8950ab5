from sqlalchemy import Column, String, DateTime, Enum as SQLEnum
from datetime import datetime
import enum

from app.core.database import Base
from app.core.types import generate_uuid


class UserRole(str, enum.Enum):
    """User roles. ADMIN only ever appears on the environment-configured identity."""
    STUDENT = "student"
    TEACHER = "teacher"
    HOD = "hod"
    ADMIN = "admin"


class UserStatus(str, enum.Enum):
    """Approval state of a registered account"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Department(str, enum.Enum):
    """Academic departments. ALL is a wildcard reserved for admin-authored records."""
    BCA = "BCA"
    BCOM = "BCom"
    BA = "BA"
    ALL = "all"


# Roles a user may self-register with
REGISTRABLE_ROLES = (UserRole.STUDENT, UserRole.TEACHER, UserRole.HOD)

# Departments a user can belong to
MEMBER_DEPARTMENTS = (Department.BCA, Department.BCOM, Department.BA)


class User(Base):
    """Registered user (student, teacher or head of department)"""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)  # stored lowercase
    phone = Column(String(20), nullable=False)
    department = Column(SQLEnum(Department), nullable=False, index=True)
    role = Column(SQLEnum(UserRole), nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    status = Column(SQLEnum(UserStatus), default=UserStatus.PENDING, nullable=False, index=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def is_approved(self) -> bool:
        return self.status == UserStatus.APPROVED

    def __repr__(self):
        return f"<User {self.email} ({self.role.value}/{self.department.value})>"
