from functools import lru_cache
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from core.config import settings
from core.errors import Forbidden, TokenError
from models.user import UserRole
from schemas.token import AccessClaims, TokenConfig
from services.user.lifecycle import TokenLifecycleService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/authentication/login-user")

@lru_cache()
def get_token_service() -> TokenLifecycleService:
    return TokenLifecycleService(TokenConfig.from_settings(settings))

async def get_current_claims(
    token: str = Depends(oauth2_scheme),
    token_service: TokenLifecycleService = Depends(get_token_service),
) -> AccessClaims:
    """
    Access Token을 검증하고 claims를 반환하는 의존성
    (저장소 조회 없이 서명만으로 검증한다)
    """
    try:
        return token_service.signer.verify(token)
    except TokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

def require_roles(*roles: UserRole):
    """
    주어진 역할 중 하나 이상을 가진 사용자만 허용하는 의존성 생성
    """
    allowed = frozenset(role.value for role in roles)

    async def dependency(claims: AccessClaims = Depends(get_current_claims)) -> AccessClaims:
        if allowed.isdisjoint(claims.roles):
            raise Forbidden("Insufficient role")
        return claims

    return dependency
