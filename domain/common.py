import re
from datetime import datetime, timezone
from typing import Iterable, List, Union

from fastapi import HTTPException
from pydantic import BaseModel


# DB의 BIGINT 범위를 넘는 id는 형식 오류로 취급
MAX_ID = 2 ** 63 - 1

_ID_PATTERN = re.compile(r"[1-9][0-9]*")


class MessageResponse(BaseModel):
    message: str = "OK"


def utcnow() -> datetime:
    """DB에 저장하는 naive UTC 시각"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_id(raw: Union[str, int]) -> int:
    """
    경로/본문으로 받은 id를 정수로 변환합니다.

    형식이 잘못된 id는 조회 전에 415로 거절합니다.
    """
    if isinstance(raw, bool):
        raise HTTPException(status_code=415, detail="Unsupported Media Type")
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip()
        if not _ID_PATTERN.fullmatch(text):
            raise HTTPException(status_code=415, detail="Unsupported Media Type")
        value = int(text)
    if value <= 0 or value > MAX_ID:
        raise HTTPException(status_code=415, detail="Unsupported Media Type")
    return value


def parse_ids(raw_ids: Iterable[Union[str, int]]) -> List[int]:
    raw_ids = list(raw_ids or [])
    if not raw_ids:
        raise HTTPException(status_code=400, detail="Bad Request")
    ids = []
    for raw in raw_ids:
        value = parse_id(raw)
        if value not in ids:
            ids.append(value)
    return ids
