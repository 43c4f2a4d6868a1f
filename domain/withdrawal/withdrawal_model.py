from sqlalchemy import Column, DateTime, Integer, String, Text

from database.session import Base
from domain.common import utcnow


class WithdrawalReason(Base):
    """탈퇴 사유 로그 (추가만 하고 삭제하지 않음)"""
    __tablename__ = "user_withdrawal_reasons"

    id = Column(Integer, primary_key=True, index=True)
    withdrawal_reason = Column(String(255), nullable=False)
    feedback = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
