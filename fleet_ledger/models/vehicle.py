"""
SQLAlchemy model for the vehicles table.
"""

import enum

from sqlalchemy import CheckConstraint, Column, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from fleet_ledger.db.session import Base
from fleet_ledger.db.base_model import BaseModel


class VehicleStatus(str, enum.Enum):
    IN_STOCK = "in_stock"
    IN_PREPARATION = "in_preparation"
    SOLD = "sold"


class Vehicle(Base, BaseModel):
    """
    One fleet item bought for resale.
    Prices are integer cents; sale_price stays NULL until a price is quoted.
    """
    __tablename__ = "vehicles"
    __table_args__ = (
        CheckConstraint("purchase_price >= 0", name="ck_vehicles_purchase_price"),
        CheckConstraint("sale_price IS NULL OR sale_price >= 0", name="ck_vehicles_sale_price"),
        CheckConstraint("mileage >= 0", name="ck_vehicles_mileage"),
    )

    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    make = Column(String, nullable=False, index=True)
    model = Column(String, nullable=False)
    year = Column(Integer, nullable=False)
    purchase_price = Column(Integer, nullable=False)
    sale_price = Column(Integer, nullable=True)
    mileage = Column(Integer, nullable=False, default=0)
    status = Column(
        Enum(VehicleStatus, name="vehicle_status", native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=VehicleStatus.IN_STOCK,
        index=True,
    )
    main_photo_url = Column(String, nullable=True)

    owner = relationship("User", back_populates="vehicles")
    costs = relationship("Cost", back_populates="vehicle", cascade="all, delete-orphan")
    photos = relationship(
        "Photo",
        back_populates="vehicle",
        cascade="all, delete-orphan",
        order_by="Photo.position",
    )

    def __repr__(self):
        return f"<Vehicle {self.id} {self.make} {self.model} {self.year}>"
