"""
SQLAlchemy model for the variable costs booked against a vehicle.
"""

import enum

from sqlalchemy import CheckConstraint, Column, DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from fleet_ledger.db.session import Base
from fleet_ledger.db.base_model import BaseModel


class CostCategory(str, enum.Enum):
    TRANSPORT = "transport"
    REPAIR = "repair"
    ADMIN = "admin"
    OTHER = "other"


class Cost(Base, BaseModel):
    """
    One incurred expense. Removed together with its vehicle.
    """
    __tablename__ = "costs"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_costs_amount"),
    )

    vehicle_id = Column(Integer, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True)
    label = Column(String, nullable=False)
    amount = Column(Integer, nullable=False)  # cents
    category = Column(
        Enum(CostCategory, name="cost_category", native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=CostCategory.OTHER,
    )
    incurred_at = Column(DateTime, nullable=False)

    vehicle = relationship("Vehicle", back_populates="costs")

    def __repr__(self):
        return f"<Cost {self.id} {self.label} for vehicle {self.vehicle_id}>"
