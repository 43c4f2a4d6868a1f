from sqlalchemy.orm import Session

from domain.marker.marker_model import Marker
from domain.place.place_model import Place


def get_markers(db: Session):
    return db.query(Marker).order_by(Marker.id).all()


def get_marker_by_id(db: Session, marker_id: int):
    return db.query(Marker).filter(Marker.id == marker_id).first()


def get_marker_by_coordinates(db: Session, latitude: str, longitude: str):
    # 근접 여부가 아닌 문자열 완전 일치로 비교
    return db.query(Marker).filter(
        Marker.latitude == latitude,
        Marker.longitude == longitude
    ).first()


def get_or_add_marker(db: Session, latitude: str, longitude: str):
    """좌표에 해당하는 마커를 찾고, 없으면 현재 트랜잭션에 추가 (커밋하지 않음)"""
    marker = get_marker_by_coordinates(db, latitude, longitude)
    if marker:
        return marker, False

    marker = Marker(latitude=latitude, longitude=longitude)
    db.add(marker)
    db.flush()
    return marker, True


def delete_marker_if_unused(db: Session, marker_id: int) -> bool:
    """참조하는 장소가 없을 때만 마커를 지우는 조건부 단일 DELETE (커밋하지 않음)"""
    in_use = db.query(Place.id).filter(Place.marker_id == marker_id).exists()
    deleted = db.query(Marker).filter(
        Marker.id == marker_id,
        ~in_use
    ).delete(synchronize_session=False)
    return deleted > 0
