"""
인원수 기록 집계

장소별로 인원수 기록을 묶어 가장 최근 기록만 남기고, 직전 기록 이후 경과한
시간(초)을 update_elapsed_time으로 붙입니다. 입력은 Headcount 응답 스키마를
model_dump()한 dict 목록이며, 입출력 모두 I/O 없는 순수 함수입니다.
"""
import math
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional

from domain.common import utcnow

NO_PREVIOUS_READING = -1

Record = Dict[str, Any]


def _as_datetime(value) -> datetime:
    if not isinstance(value, datetime):
        value = datetime.fromisoformat(str(value))
    # 시간대가 있는 값은 naive UTC로 맞춰 비교
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _recency_key(record: Record):
    # 같은 시각이면 id가 큰(나중에 저장된) 기록을 앞에 둠
    return _as_datetime(record["created_at"]), record.get("id") or 0


def _place_key(record: Record) -> Hashable:
    return record["place_id"]


def _marker_key(record: Record) -> Hashable:
    return record["place"]["marker_id"]


def add_update_elapsed_time(
    records: Iterable[Record],
    now: Optional[datetime] = None,
    group_key: Callable[[Record], Hashable] = _place_key,
) -> List[Record]:
    """
    장소별 최신 기록에 경과 시간을 붙여 반환합니다.

    Args:
        records: place_id, created_at(datetime 또는 ISO 문자열)을 가진 기록 목록
        now: 기준 시각, 생략하면 현재 UTC
        group_key: 묶는 기준 (기본값은 place_id)

    Returns:
        그룹마다 하나씩, 최신 기록이 앞에 오도록 정렬된 목록.
        update_elapsed_time은 now와 두 번째로 최근인 기록 사이의 초(내림),
        기록이 하나뿐이면 -1.
    """
    now = utcnow() if now is None else _as_datetime(now)

    groups: Dict[Hashable, List[Record]] = {}
    for record in records:
        groups.setdefault(group_key(record), []).append(record)

    annotated = []
    for group in groups.values():
        group.sort(key=_recency_key, reverse=True)
        latest = dict(group[0])
        if len(group) > 1:
            previous_at = _as_datetime(group[1]["created_at"])
            latest["update_elapsed_time"] = math.floor((now - previous_at).total_seconds())
        else:
            latest["update_elapsed_time"] = NO_PREVIOUS_READING
        annotated.append(latest)

    annotated.sort(key=_recency_key, reverse=True)
    return annotated


def latest_per_marker(records: Iterable[Record]) -> List[Record]:
    """마커(좌표)마다 가장 최근에 갱신된 장소의 기록 하나만 남김"""
    latest: Dict[Hashable, Record] = {}
    for record in records:
        key = _marker_key(record)
        if key not in latest or _recency_key(record) > _recency_key(latest[key]):
            latest[key] = record

    return sorted(latest.values(), key=_recency_key, reverse=True)
