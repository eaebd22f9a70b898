from datetime import datetime, timedelta
from typing import List
from pydantic import BaseModel, Field

class TokenConfig(BaseModel):
    """
    토큰 발급/검증 설정 (불변)
    Settings에서 한 번 만들어 Signer와 Coordinator에 주입한다.
    """
    secret_key: str
    algorithm: str = "HS256"
    issuer: str
    audience: str
    access_token_ttl: timedelta = timedelta(minutes=1)
    refresh_token_ttl: timedelta = timedelta(days=180)

    class Config:
        frozen = True

    @classmethod
    def from_settings(cls, settings) -> "TokenConfig":
        return cls(
            secret_key=settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
            issuer=settings.JWT_ISSUER,
            audience=settings.JWT_AUDIENCE,
            access_token_ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            refresh_token_ttl=timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        )

class AccessClaims(BaseModel):
    """
    Access Token에 담기는 사용자 claims
    (iss, aud, iat, exp 같은 등록 claim은 서명 시점에 추가된다)
    """
    name: str
    nameid: str
    email: str
    sub: str
    jti: str
    roles: List[str] = Field(default_factory=list)

class TokenRequest(BaseModel):
    """
    토큰 재발급 요청
    """
    access_token: str = Field(..., min_length=1)
    refresh_token: str = Field(..., min_length=1)

class AuthResult(BaseModel):
    """
    클라이언트에게 최종 반환될 토큰 응답
    """
    access_token: str
    expires_at: datetime
    refresh_token: str
    token_type: str = "bearer"
