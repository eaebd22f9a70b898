import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from core.errors import AuthServiceError
from core.security.dependencies import get_token_service
from schemas.token import AuthResult
from schemas.user import MessageResponse, UserCreate, UserLogin
from services.user.general import user_general_service
from services.user.lifecycle import TokenLifecycleService

logger = logging.getLogger(__name__)
router = APIRouter(prefix='/authentication', tags=['Authentication'])

@router.post("/register-user", response_model=MessageResponse)
async def register_user(
    user_in: UserCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    회원가입 (역할 지정)
    """
    try:
        await user_general_service.create_user(
            db=db,
            username=user_in.username,
            email=user_in.email,
            password=user_in.password,
            role=user_in.role,
            first_name=user_in.first_name,
            last_name=user_in.last_name,
        )
    except AuthServiceError:
        raise
    except Exception as e:
        logger.error(f"⛔ 회원가입 중 예외 발생: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="User could not be created"
        )

    logger.info(f"✅ 회원가입 완료: {user_in.username} ({user_in.role.value})")
    return MessageResponse(message="User created")

@router.post("/login-user", response_model=AuthResult)
async def login_user(
    login_in: UserLogin,
    db: AsyncSession = Depends(get_db),
    token_service: TokenLifecycleService = Depends(get_token_service),
):
    """
    이메일/비밀번호 로그인: Access Token과 Refresh Token 발급
    """
    try:
        return await token_service.login(db, login_in.email, login_in.password)
    except AuthServiceError:
        raise
    except Exception as e:
        logger.error(f"⛔ 로그인 중 예외 발생: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Login failed"
        )
