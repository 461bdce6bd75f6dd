"""
Auth endpoints - registration and login (RESTful API).
Challenge: Secure auth, validation, clear status codes.
"""

from fastapi import APIRouter

from app.core.dependencies import AuthServiceDep, CurrentUserId
from app.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserResponse

router = APIRouter()


@router.post("/register", response_model=AuthResponse)
async def register(auth: AuthServiceDep, data: RegisterRequest):
    """Create new user and sign them in. 400 if username or email is taken."""
    token, user = await auth.register(data.username, data.email, data.password)
    return AuthResponse(token=token, username=user.username, email=user.email)


@router.post("/login", response_model=AuthResponse)
async def login(auth: AuthServiceDep, data: LoginRequest):
    """Authenticate and return a 24h JWT."""
    token, user = await auth.login(data.username, data.password)
    return AuthResponse(token=token, username=user.username, email=user.email)


@router.get("/me", response_model=UserResponse)
async def me(auth: AuthServiceDep, user_id: CurrentUserId):
    """Public profile of the token's user."""
    user = await auth.user_repo.get_by_id(user_id)
    return UserResponse.model_validate(user)
