from sqlalchemy import Column, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship

from database.session import Base
from domain.common import utcnow

NO_DATA_HEADCOUNT = -1


class Headcount(Base):
    __tablename__ = "headcounts"

    id = Column(Integer, primary_key=True, index=True)
    place_id = Column(Integer, ForeignKey("places.id"), nullable=False, index=True)
    headcount = Column(Integer, nullable=False)
    user_id = Column(Integer, nullable=True)  # 보고한 사용자, 기본값 레코드는 없음
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    place = relationship("Place", back_populates="headcounts")
