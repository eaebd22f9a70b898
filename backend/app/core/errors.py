import enum
from typing import Optional


class AuthServiceError(Exception):
    """
    서비스 계층 예외의 기본 클래스
    각 예외는 HTTP status_code와 고정된 error_code를 가진다.
    """
    status_code: int = 400
    error_code: str = "bad_request"

    def __init__(self, message: str, *, detail: Optional[dict] = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail or {}


class ValidationFailure(AuthServiceError):
    """필수 요청 필드 누락 (400)"""
    status_code = 400
    error_code = "validation_error"


class DuplicateUser(AuthServiceError):
    """이미 존재하는 이메일 또는 유저이름 (400)"""
    status_code = 400
    error_code = "duplicate_user"


class UserCreationFailed(AuthServiceError):
    status_code = 400
    error_code = "user_not_created"


class AuthFailure(AuthServiceError):
    """잘못된 자격 증명 (401)"""
    status_code = 401
    error_code = "unauthorized"


class Forbidden(AuthServiceError):
    """요구되는 역할이 없음 (403)"""
    status_code = 403
    error_code = "forbidden"


class TokenError(AuthServiceError):
    status_code = 401
    error_code = "invalid_token"


class TokenMalformed(TokenError):
    error_code = "token_malformed"


class TokenSignatureInvalid(TokenError):
    error_code = "token_signature_invalid"


class TokenIssuerMismatch(TokenError):
    error_code = "token_issuer_mismatch"


class TokenExpired(TokenError):
    """
    만료된 Access Token
    서명과 issuer/audience 검증은 이미 통과했으므로 디코딩된 claims를 함께 보관한다.
    """
    error_code = "token_expired"

    def __init__(self, message: str, *, claims=None) -> None:
        super().__init__(message)
        self.claims = claims


class DenialReason(str, enum.Enum):
    REFRESH_TOKEN_NOT_FOUND = "refresh_token_not_found"
    REFRESH_TOKEN_REVOKED = "refresh_token_revoked"
    USER_NOT_FOUND = "user_not_found"
    USER_INACTIVE = "user_inactive"
    TOKEN_MALFORMED = "token_malformed"
    TOKEN_SIGNATURE_INVALID = "token_signature_invalid"
    TOKEN_ISSUER_MISMATCH = "token_issuer_mismatch"


_TOKEN_ERROR_REASONS = {
    TokenMalformed: DenialReason.TOKEN_MALFORMED,
    TokenSignatureInvalid: DenialReason.TOKEN_SIGNATURE_INVALID,
    TokenIssuerMismatch: DenialReason.TOKEN_ISSUER_MISMATCH,
}


class RefreshDenied(AuthServiceError):
    """토큰 재발급 거부 (401)"""
    status_code = 401
    error_code = "refresh_denied"

    def __init__(self, reason: DenialReason, message: Optional[str] = None) -> None:
        super().__init__(message or f"Token refresh denied: {reason.value}", detail={"reason": reason.value})
        self.reason = reason

    @classmethod
    def from_token_error(cls, exc: TokenError) -> "RefreshDenied":
        reason = _TOKEN_ERROR_REASONS.get(type(exc), DenialReason.TOKEN_MALFORMED)
        return cls(reason, exc.message)
