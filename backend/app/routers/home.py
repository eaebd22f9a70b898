from fastapi import APIRouter, Depends

from core.security.dependencies import require_roles
from models.user import UserRole

router = APIRouter(
    prefix="/home",
    tags=["Home"],
    dependencies=[Depends(require_roles(UserRole.STUDENT, UserRole.MANAGER))]
)

@router.get("/student", dependencies=[Depends(require_roles(UserRole.STUDENT))])
async def get_student():
    return "Welcome to HomeController - Student"

@router.get("/manager", dependencies=[Depends(require_roles(UserRole.MANAGER))])
async def get_manager():
    return "Welcome to HomeController - Manager"
