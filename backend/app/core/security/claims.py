import uuid
from typing import Iterable

from models.user import User
from schemas.token import AccessClaims

def generate_jti() -> str:
    return str(uuid.uuid4())

def build_claims(user: User, roles: Iterable[str]) -> AccessClaims:
    """
    사용자 claims 구성
    역할은 주어진 순서 그대로, 중복 제거 없이 담는다. 호출마다 새 jti를 발급한다.
    """
    return AccessClaims(
        name=user.username,
        nameid=str(user.user_id),
        email=user.email,
        sub=user.email,
        jti=generate_jti(),
        roles=list(roles),
    )
