from .user import User, UserRole, UserRoleAssignment
from .refresh_token import RefreshToken
