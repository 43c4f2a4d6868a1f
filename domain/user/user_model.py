from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from database.session import Base
from domain.common import utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    username = Column(String(100), nullable=False)
    role = Column(String(20), nullable=False, default="member")  # member, admin
    point = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    bookmarks = relationship("Bookmark", back_populates="user", passive_deletes=True)
    search_histories = relationship("SearchHistory", back_populates="user", passive_deletes=True)
