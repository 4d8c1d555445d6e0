"""User domain model — maps to the 'users' table."""

from sqlalchemy import Column, DateTime, Enum, Integer, String
from sqlalchemy.sql import func

from courseload.domain.enums import Role, enum_values
from courseload.infrastructure.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(Role, native_enum=False, length=20, values_callable=enum_values),
        nullable=False,
        default=Role.LECTURER,
        index=True,
    )
    bank_name = Column(String(200), nullable=False)
    bank_account_number = Column(String(100), nullable=False)
    bank_bban = Column(String(100), nullable=False)
    school = Column(String(200), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<User {self.email} ({self.role.value if self.role else '?'})>"
