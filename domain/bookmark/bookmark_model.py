from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from database.session import Base


class Bookmark(Base):
    __tablename__ = "bookmarks"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    bookmark_name = Column(String(100), nullable=False)
    icon_color = Column(Integer, nullable=False)

    user = relationship("User", back_populates="bookmarks")
    places = relationship(
        "BookmarkPlace",
        back_populates="bookmark",
        order_by="BookmarkPlace.id",
        cascade="all, delete-orphan",
    )

    @property
    def place_ids(self):
        return [bookmark_place.place_id for bookmark_place in self.places]


class BookmarkPlace(Base):
    """
    북마크에 담긴 장소 참조.

    장소가 삭제되어도 즉시 정리하지 않으므로 place_id는 외래키가 아니며,
    조회 시점에 존재하지 않는 장소를 걸러냅니다.
    """
    __tablename__ = "bookmark_places"
    __table_args__ = (
        UniqueConstraint("bookmark_id", "place_id", name="uq_bookmark_places"),
    )

    id = Column(Integer, primary_key=True, index=True)
    bookmark_id = Column(Integer, ForeignKey("bookmarks.id", ondelete="CASCADE"), nullable=False, index=True)
    place_id = Column(Integer, nullable=False, index=True)

    bookmark = relationship("Bookmark", back_populates="places")
