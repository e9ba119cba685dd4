"""
SQLAlchemy model for the merchant accounts owning the fleet.
"""

import enum

from sqlalchemy import Column, Enum, String
from sqlalchemy.orm import relationship

from fleet_ledger.db.session import Base
from fleet_ledger.db.base_model import BaseModel


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    SELLER = "seller"


class User(Base, BaseModel):
    """
    A merchant account. Every vehicle is owned by exactly one user.
    """
    __tablename__ = "users"

    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    name = Column(String, nullable=True)
    role = Column(
        Enum(UserRole, name="user_role", native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=UserRole.SELLER,
    )

    vehicles = relationship("Vehicle", back_populates="owner", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User {self.email}>"
