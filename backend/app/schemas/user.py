from pydantic import BaseModel, EmailStr, Field

from models.user import UserRole

class UserCreate(BaseModel):
    """
    회원가입 요청
    """
    email: EmailStr
    password: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1, max_length=100)
    first_name: str | None = Field(None, max_length=50)
    last_name: str | None = Field(None, max_length=50)
    role: UserRole

class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

class MessageResponse(BaseModel):
    """
    간단한 성공/오류 메시지 반환용
    """
    message: str
