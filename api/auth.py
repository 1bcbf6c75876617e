from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_current_user
from database import get_db
from schemas.auth import LoginRequest, SignupRequest, UserPublic
from services import auth
from services.errors import ForbiddenError
from services.workflow import get_onboarding_status

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/signup", status_code=201)
async def signup(body: SignupRequest, db: AsyncSession = Depends(get_db)):
    user_id = await auth.signup(db, body.username, body.password)
    return {"message": "User registered successfully", "userId": user_id}


@router.post("/login")
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    token, user = await auth.login(db, body.username, body.password)
    return {"message": "Login successful", "accessToken": token, "user": user.model_dump()}


@router.get("/dashboard")
async def dashboard(user: UserPublic = Depends(get_current_user)):
    return {"message": "Welcome to the dashboard!", "user": user.model_dump()}


@router.get("/user/onboarding-status/{user_id}")
async def onboarding_status(
    user_id: int,
    user: UserPublic = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    # Users may only read their own status; admins may read anyone's
    if user_id != user.id and user.role != "admin":
        raise ForbiddenError("Not allowed to view another user's onboarding status")
    return {"status": await get_onboarding_status(db, user_id)}
