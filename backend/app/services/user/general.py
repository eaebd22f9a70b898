import logging
from typing import List
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from core.errors import DuplicateUser, UserCreationFailed
from core.security.hashing import hash_password, verify_password
from models.user import User, UserRole, UserRoleAssignment

logger = logging.getLogger(__name__)

def normalize_email(email: str) -> str:
    # 이메일은 대소문자를 구분하지 않는다
    return email.strip().lower()

class UserGeneralService:
    async def check_existence(
            self,
            db: AsyncSession,
            field: str,
            value: str
    ) -> bool:
        """중복 확인: 존재하면 True, 없으면 False"""
        if field == "username":
            query = select(User).where(User.username == value)
        elif field == "email":
            query = select(User).where(func.lower(User.email) == normalize_email(value))
        else:
            raise ValueError(f"Unsupported field: {field}")

        result = await db.execute(query)
        return result.scalars().first() is not None

    async def create_user(
        self,
        db: AsyncSession,
        username: str,
        email: str,
        password: str,
        role: UserRole,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> User:
        """신규 사용자 생성 및 역할 부여"""
        email = normalize_email(email)
        if await self.check_existence(db, "email", email):
            raise DuplicateUser(f"User {email} already exists")
        if await self.check_existence(db, "username", username):
            raise DuplicateUser(f"Username {username} is already taken")

        new_user = User(
            username=username,
            email=email,
            hashed_password=hash_password(password),
            first_name=first_name,
            last_name=last_name,
        )
        db.add(new_user)
        try:
            await db.flush()
            db.add(UserRoleAssignment(user_id=new_user.user_id, role=role))
            await db.commit()
        except IntegrityError as e:
            # 동시 가입으로 unique 제약에 걸린 경우
            await db.rollback()
            logger.warning(f"⚠️ 사용자 생성 실패 (제약 조건 위반): {email}")
            raise UserCreationFailed("User could not be created") from e

        await db.refresh(new_user)
        return new_user

    async def get_user_by_id(self, db: AsyncSession, user_id: int) -> User | None:
        """ID로 사용자 조회"""
        result = await db.execute(select(User).where(User.user_id == user_id))
        return result.scalars().first()

    async def get_user_by_email(self, db: AsyncSession, email: str) -> User | None:
        """이메일로 사용자 조회"""
        result = await db.execute(select(User).where(func.lower(User.email) == normalize_email(email)))
        return result.scalars().first()

    def check_password(self, user: User, password: str) -> bool:
        return verify_password(password, user.hashed_password)

    async def get_roles(self, db: AsyncSession, user: User) -> List[str]:
        """부여된 역할 이름 목록 (부여 순서 유지)"""
        result = await db.execute(
            select(UserRoleAssignment.role)
            .where(UserRoleAssignment.user_id == user.user_id)
            .order_by(UserRoleAssignment.user_role_id)
        )
        return [role.value for role in result.scalars().all()]

user_general_service = UserGeneralService()
