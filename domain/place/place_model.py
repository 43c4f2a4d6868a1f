from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from database.session import Base


class Place(Base):
    __tablename__ = "places"

    id = Column(Integer, primary_key=True, index=True)
    place_name = Column(String(255), nullable=False)
    address = Column(String(255), nullable=False)
    detail_address = Column(String(255), nullable=False)
    marker_id = Column(Integer, ForeignKey("markers.id"), nullable=False, index=True)

    marker = relationship("Marker", back_populates="places")
    headcounts = relationship("Headcount", back_populates="place", passive_deletes=True)
