from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, func, Boolean, ForeignKey, Integer
from sqlalchemy.orm import relationship

from core.database import Base

class RefreshToken(Base):
    """
    리프레시 토큰 저장소
    한 번 저장된 레코드는 수정/삭제하지 않으며, 만료 여부는 조회 시점에 판단한다.
    """
    __tablename__ = "refresh_tokens"
    refresh_token_id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)

    token = Column(String(512), unique=True, index=True, nullable=False)
    # 함께 발급된 Access Token의 jti
    jwt_id = Column(String(64), nullable=False)

    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    is_revoked = Column(Boolean, default=False, nullable=False)

    user = relationship("User", back_populates="refresh_tokens")

    def is_expired(self, now: datetime) -> bool:
        expires_at = self.expires_at
        # SQLite는 tz 정보를 보존하지 않으므로 UTC로 간주
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return expires_at < now
