import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from core.errors import AuthServiceError
from core.security.dependencies import get_token_service
from schemas.token import AuthResult, TokenRequest
from services.user.lifecycle import TokenLifecycleService

logger = logging.getLogger(__name__)

router = APIRouter(prefix='/authentication', tags=['Token'])

@router.post('/refresh-token-user', response_model=AuthResult)
async def refresh_access_token(
    token_in: TokenRequest,
    db: AsyncSession = Depends(get_db),
    token_service: TokenLifecycleService = Depends(get_token_service),
):
    """
    이전 Access Token과 Refresh Token으로 Access Token 재발급
    """
    try:
        return await token_service.refresh(db, token_in.access_token, token_in.refresh_token)
    except AuthServiceError:
        raise
    except Exception as e:
        logger.error(f"⛔ 토큰 재발급 중 예외 발생: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Token refresh failed"
        )
