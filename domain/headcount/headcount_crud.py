from typing import List

from sqlalchemy.orm import Session, joinedload

from domain.headcount.headcount_model import Headcount
from domain.place.place_model import Place


def _with_place(db: Session):
    return db.query(Headcount).options(
        joinedload(Headcount.place).joinedload(Place.marker)
    )


def get_headcounts(db: Session):
    return db.query(Headcount).order_by(Headcount.id).all()


def get_headcounts_with_place(db: Session):
    return _with_place(db).order_by(Headcount.id).all()


def get_headcounts_by_place(db: Session, place_id: int):
    return _with_place(db).filter(Headcount.place_id == place_id).order_by(Headcount.id).all()


def get_headcounts_by_places(db: Session, place_ids: List[int]):
    if not place_ids:
        return []
    return _with_place(db).filter(Headcount.place_id.in_(place_ids)).order_by(Headcount.id).all()


def get_headcounts_by_marker(db: Session, marker_id: int):
    return _with_place(db).join(Headcount.place).filter(
        Place.marker_id == marker_id
    ).order_by(Headcount.id).all()


def create_headcount(db: Session, place_id: int, headcount: int, user_id: int):
    db_headcount = Headcount(place_id=place_id, headcount=headcount, user_id=user_id)
    db.add(db_headcount)
    db.commit()
    db.refresh(db_headcount)
    return db_headcount
