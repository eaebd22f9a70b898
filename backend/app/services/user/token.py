from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from models.refresh_token import RefreshToken

class RefreshTokenStore:
    """
    Refresh Token 저장소 어댑터
    조회와 추가만 제공한다. 만료/폐기 판단은 호출하는 쪽의 몫이다.
    """
    async def find_by_token(
        self,
        db: AsyncSession,
        token: str
    ) -> RefreshToken | None:
        result = await db.execute(
            select(RefreshToken).where(RefreshToken.token == token)
        )
        return result.scalars().first()

    async def create(
        self,
        db: AsyncSession,
        *,
        token: str,
        jwt_id: str,
        user_id: int,
        created_at: datetime,
        expires_at: datetime,
    ) -> RefreshToken:
        """
        Refresh Token을 DB에 저장
        commit까지 끝난 뒤에 반환하므로 응답 전에 저장이 보장된다.
        """
        new_token = RefreshToken(
            user_id=user_id,
            token=token,
            jwt_id=jwt_id,
            is_revoked=False,
            created_at=created_at,
            expires_at=expires_at,
        )
        db.add(new_token)
        await db.commit()
        await db.refresh(new_token)
        return new_token

refresh_token_store = RefreshTokenStore()
