from sqlalchemy import Column, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from database.session import Base


class Marker(Base):
    __tablename__ = "markers"
    __table_args__ = (
        UniqueConstraint("latitude", "longitude", name="uq_markers_coordinates"),
    )

    id = Column(Integer, primary_key=True, index=True)
    # 정밀도 유지를 위해 좌표는 문자열 그대로 저장
    latitude = Column(String(32), nullable=False)
    longitude = Column(String(32), nullable=False)

    places = relationship("Place", back_populates="marker")
