import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable, Tuple
from jose import JWTError, jwt
from jose.exceptions import JWTClaimsError
from pydantic import ValidationError

from core.errors import TokenExpired, TokenIssuerMismatch, TokenMalformed, TokenSignatureInvalid
from schemas.token import AccessClaims, TokenConfig

Clock = Callable[[], datetime]

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def create_refresh_token() -> str:
    """
    Refresh Token (단순 랜덤 문자열) 생성
    """
    return secrets.token_hex(32)

class JWTSigner:
    """
    Access Token (JWT) 서명 및 검증

    검증 실패는 종류별로 구분된다.
    - 구조 오류 / 서명 불일치 / issuer·audience 불일치: 복구 불가
    - 만료: 재발급 흐름에서 복구 가능 (TokenExpired에 claims가 담긴다)
    만료 판단은 주입된 clock 기준이며 허용 오차는 없다.
    """

    def __init__(self, config: TokenConfig, clock: Clock = utcnow):
        self._config = config
        self._clock = clock

    def sign(self, claims: AccessClaims, ttl: timedelta | None = None) -> Tuple[str, datetime]:
        # JWT의 exp는 초 단위이므로 발급 시각도 초 단위로 맞춘다
        issued_at = self._clock().replace(microsecond=0)
        expires_at = issued_at + (ttl if ttl is not None else self._config.access_token_ttl)

        to_encode = claims.model_dump()
        to_encode.update({
            "iss": self._config.issuer,
            "aud": self._config.audience,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        })
        encoded_jwt = jwt.encode(to_encode, self._config.secret_key, algorithm=self._config.algorithm)
        return encoded_jwt, expires_at

    def verify(self, token: str) -> AccessClaims:
        try:
            jwt.get_unverified_claims(token)
        except JWTError as e:
            raise TokenMalformed(f"Malformed token: {e}")

        try:
            payload = jwt.decode(
                token,
                self._config.secret_key,
                algorithms=[self._config.algorithm],
                options={"verify_exp": False, "verify_aud": False},
            )
        except JWTClaimsError as e:
            raise TokenMalformed(f"Invalid claim format: {e}")
        except JWTError as e:
            raise TokenSignatureInvalid(f"Invalid token signature: {e}")

        # issuer/audience는 jose에 맡기지 않고 직접 확인한다 (aud 누락도 거부)
        if payload.get("iss") != self._config.issuer or not self._audience_matches(payload.get("aud")):
            raise TokenIssuerMismatch("Invalid issuer or audience")

        exp = payload.get("exp")
        if not isinstance(exp, int):
            raise TokenMalformed("Token has no expiry")

        try:
            claims = AccessClaims.model_validate(payload)
        except ValidationError as e:
            raise TokenMalformed(f"Token claims are incomplete: {e.error_count()} error(s)")

        if exp < self._clock().timestamp():
            raise TokenExpired("Token expired", claims=claims)
        return claims

    def _audience_matches(self, aud) -> bool:
        # aud는 문자열 또는 문자열 목록일 수 있다
        if isinstance(aud, str):
            return aud == self._config.audience
        if isinstance(aud, list):
            return self._config.audience in aud
        return False
