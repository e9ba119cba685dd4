from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from fleet_ledger.db.session import Base
from fleet_ledger.db.base_model import BaseModel


class Photo(Base, BaseModel):
    """Ordered photo reference of a vehicle. Only the URL is stored."""
    __tablename__ = "photos"

    vehicle_id = Column(Integer, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(String, nullable=False)
    position = Column(Integer, nullable=False, default=0)

    vehicle = relationship("Vehicle", back_populates="photos")

    def __repr__(self):
        return f"<Photo {self.id} #{self.position} for vehicle {self.vehicle_id}>"
