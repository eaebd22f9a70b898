from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

ph = PasswordHasher()

def hash_password(password: str) -> str:
    """Argon2로 평문 비밀번호 해싱"""
    return ph.hash(password)

def verify_password(password: str, hashed_password: str) -> bool:
    """평문 비밀번호와 저장된 해시 비교"""
    try:
        return ph.verify(hashed_password, password)
    except (VerificationError, InvalidHashError):
        return False
