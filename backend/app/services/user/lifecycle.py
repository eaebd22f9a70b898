import logging
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import AuthFailure, DenialReason, RefreshDenied, TokenError, TokenExpired
from core.security.claims import build_claims
from core.security.token import Clock, JWTSigner, create_refresh_token, utcnow
from models.refresh_token import RefreshToken
from models.user import User
from schemas.token import AuthResult, TokenConfig
from services.user.general import UserGeneralService, user_general_service
from services.user.token import RefreshTokenStore, refresh_token_store

logger = logging.getLogger(__name__)

class TokenLifecycleService:
    """
    로그인(토큰 쌍 발급)과 토큰 재발급을 담당한다.

    재발급 규칙:
    - Access Token이 유효함            -> 새 Access Token, 기존 Refresh Token 재사용
    - 만료됨 + Refresh Token 유효      -> 새 Access Token, 기존 Refresh Token 재사용
    - 만료됨 + Refresh Token도 만료    -> Access/Refresh Token 모두 새로 발급
    - 그 외 검증 실패                  -> RefreshDenied
    사용자는 항상 저장된 Refresh Token 레코드의 user_id로 식별한다.
    """

    def __init__(
        self,
        config: TokenConfig,
        users: UserGeneralService = user_general_service,
        refresh_tokens: RefreshTokenStore = refresh_token_store,
        clock: Clock = utcnow,
    ):
        self._config = config
        self._users = users
        self._refresh_tokens = refresh_tokens
        self._clock = clock
        self._signer = JWTSigner(config, clock=clock)

    @property
    def signer(self) -> JWTSigner:
        return self._signer

    async def login(self, db: AsyncSession, email: str, password: str) -> AuthResult:
        user = await self._users.get_user_by_email(db, email)
        if not user or not self._users.check_password(user, password):
            logger.info("⛔ 로그인 실패: 이메일 또는 비밀번호 불일치")
            raise AuthFailure("Invalid email or password")

        if not user.is_active:
            logger.info(f"⛔ 로그인 실패: 비활성 사용자 (user_id={user.user_id})")
            raise AuthFailure("Inactive user")

        result = await self._issue(db, user, stored_token=None)
        logger.info(f"✅ 로그인 성공 (user_id={user.user_id})")
        return result

    async def refresh(self, db: AsyncSession, access_token: str, refresh_token: str) -> AuthResult:
        stored_token = await self._refresh_tokens.find_by_token(db, refresh_token)
        if stored_token is None:
            logger.info("⛔ 재발급 거부: 저장된 Refresh Token 없음")
            raise RefreshDenied(DenialReason.REFRESH_TOKEN_NOT_FOUND)

        if stored_token.is_revoked:
            logger.info(f"⛔ 재발급 거부: 폐기된 Refresh Token (id={stored_token.refresh_token_id})")
            raise RefreshDenied(DenialReason.REFRESH_TOKEN_REVOKED)

        user = await self._users.get_user_by_id(db, stored_token.user_id)
        if user is None:
            logger.info(f"⛔ 재발급 거부: 사용자 없음 (user_id={stored_token.user_id})")
            raise RefreshDenied(DenialReason.USER_NOT_FOUND)

        if not user.is_active:
            logger.info(f"⛔ 재발급 거부: 비활성 사용자 (user_id={user.user_id})")
            raise RefreshDenied(DenialReason.USER_INACTIVE)

        try:
            self._signer.verify(access_token)
        except TokenExpired:
            if not stored_token.is_expired(self._clock()):
                logger.info(f"🔄 만료된 Access Token 재발급 (user_id={user.user_id})")
                return await self._issue(db, user, stored_token=stored_token)

            logger.info(f"🔄 Refresh Token 만료, 토큰 쌍 전체 재발급 (user_id={user.user_id})")
            return await self._issue(db, user, stored_token=None)
        except TokenError as e:
            denied = RefreshDenied.from_token_error(e)
            logger.info(f"⛔ 재발급 거부: {denied.reason.value} (user_id={user.user_id})")
            raise denied from e

        logger.info(f"🔄 유효한 Access Token 재발급 (user_id={user.user_id})")
        return await self._issue(db, user, stored_token=stored_token)

    async def _issue(self, db: AsyncSession, user: User, stored_token: RefreshToken | None) -> AuthResult:
        roles = await self._users.get_roles(db, user)
        claims = build_claims(user, roles)
        access_token, expires_at = self._signer.sign(claims)

        if stored_token is not None:
            return AuthResult(
                access_token=access_token,
                expires_at=expires_at,
                refresh_token=stored_token.token,
            )

        created_at = self._clock()
        new_token = await self._refresh_tokens.create(
            db,
            token=create_refresh_token(),
            jwt_id=claims.jti,
            user_id=user.user_id,
            created_at=created_at,
            expires_at=created_at + self._config.refresh_token_ttl,
        )
        return AuthResult(
            access_token=access_token,
            expires_at=expires_at,
            refresh_token=new_token.token,
        )
