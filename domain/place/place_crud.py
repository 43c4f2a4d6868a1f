import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from domain.headcount.headcount_model import Headcount, NO_DATA_HEADCOUNT
from domain.marker import marker_crud
from domain.place import place_schema
from domain.place.place_model import Place

logger = logging.getLogger(__name__)

# 동시에 같은 좌표로 마커를 만들다 unique 제약에 걸리면 한 번 더 시도
CREATE_ATTEMPTS = 2


def get_places(db: Session):
    return db.query(Place).order_by(Place.id).all()


def get_place_by_id(db: Session, place_id: int):
    return db.query(Place).options(joinedload(Place.marker)).filter(Place.id == place_id).first()


def count_places_by_marker(db: Session, marker_id: int) -> int:
    return db.query(Place).filter(Place.marker_id == marker_id).count()


def create_place(db: Session, place: place_schema.PlaceCreate):
    """
    장소 등록.

    같은 좌표의 마커가 없으면 먼저 만들고, 장소와 함께 "데이터 없음"을 뜻하는
    기본 인원수 레코드(-1)를 하나의 트랜잭션으로 저장합니다.
    """
    for attempt in range(1, CREATE_ATTEMPTS + 1):
        try:
            marker, created = marker_crud.get_or_add_marker(db, place.latitude, place.longitude)
            db_place = Place(
                place_name=place.place_name,
                address=place.address,
                detail_address=place.detail_address,
                marker_id=marker.id,
            )
            db.add(db_place)
            db.flush()
            db.add(Headcount(place_id=db_place.id, headcount=NO_DATA_HEADCOUNT))
            db.commit()
        except IntegrityError:
            db.rollback()
            if attempt == CREATE_ATTEMPTS:
                raise
            logger.warning(f"마커 생성 충돌, 재시도합니다: ({place.latitude}, {place.longitude})")
            continue

        if created:
            logger.info(f"새 마커 생성: {marker.id} ({place.latitude}, {place.longitude})")
        db.refresh(db_place)
        return db_place


def update_place(db: Session, db_place: Place, place_update: place_schema.PlaceUpdate):
    db_place.place_name = place_update.place_name
    db_place.detail_address = place_update.detail_address
    db.commit()
    db.refresh(db_place)
    return db_place


def delete_place(db: Session, db_place: Place) -> int:
    """
    장소와 인원수 기록을 삭제하고, 그 장소가 마커의 마지막 장소였다면 마커도 삭제합니다.
    삭제 후 같은 마커에 남은 장소 수를 반환합니다.
    """
    marker_id = db_place.marker_id
    try:
        db.query(Headcount).filter(Headcount.place_id == db_place.id).delete(synchronize_session=False)
        db.delete(db_place)
        db.flush()
        marker_deleted = marker_crud.delete_marker_if_unused(db, marker_id)
        remaining = 0 if marker_deleted else count_places_by_marker(db, marker_id)
        db.commit()
    except Exception:
        db.rollback()
        raise

    if marker_deleted:
        logger.info(f"마지막 장소 삭제로 마커 제거: {marker_id}")
    return remaining
