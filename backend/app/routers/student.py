from fastapi import APIRouter, Depends

from core.security.dependencies import require_roles
from models.user import UserRole

router = APIRouter(
    prefix="/student",
    tags=["Student"],
    dependencies=[Depends(require_roles(UserRole.STUDENT))]
)

@router.get("")
async def get_student():
    return "Welcome to StudentController"
