from fastapi import APIRouter, Depends

from core.security.dependencies import require_roles
from models.user import UserRole

router = APIRouter(
    prefix="/management",
    tags=["Management"],
    dependencies=[Depends(require_roles(UserRole.MANAGER))]
)

@router.get("")
async def get_management():
    return "Welcome to ManagementController"
