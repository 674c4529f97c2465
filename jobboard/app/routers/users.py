from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from ..database import InMemoryDatabase, verify_password
from ..dependencies import (
    create_token,
    get_current_user,
    get_db,
    get_settings,
    read_body,
    set_session_cookie,
    validate_body,
)
from ..models.users import LoginRequest, PasswordUpdate, ProfileUpdate, RegisterRequest

from jobboard.core.config import ServerSettings
from jobboard.core.schemas import UserRole

router = APIRouter(prefix="/api/v1/user", tags=["users"])

NICHE_FIELDS = {"first_niche": "firstNiche", "second_niche": "secondNiche", "third_niche": "thirdNiche"}


def _niches(model) -> dict:
    return {wire: getattr(model, field) for field, wire in NICHE_FIELDS.items()}


def _login_response(response: Response, user: dict, message: str, settings: ServerSettings) -> dict:
    token = create_token(user["_id"], settings)
    set_session_cookie(response, token, settings)
    return {
        "success": True,
        "user": InMemoryDatabase.public_user(user),
        "message": message,
        "token": token,
    }


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    request: Request,
    response: Response,
    db: InMemoryDatabase = Depends(get_db),
    settings: ServerSettings = Depends(get_settings)
):
    """Create an account and start a session"""
    body = await read_body(request)
    resume = body.pop("resume", None)
    data = validate_body(RegisterRequest, body)

    if db.find_user_by_email(data.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email is already registered.")
    niches = _niches(data)
    if data.role is UserRole.JOB_SEEKER and not all(niches.values()):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please provide your preferred job niches."
        )

    fields = {
        "name": data.name,
        "email": data.email,
        "phone": data.phone,
        "address": data.address,
        "role": data.role.value,
        "niches": niches,
        "coverLetter": data.cover_letter,
    }
    if isinstance(resume, dict):
        fields["resume"] = resume
    user = db.add_user(fields, data.password)
    return _login_response(response, user, "User Registered.", settings)


@router.post("/login")
async def login(
    credentials: LoginRequest,
    response: Response,
    db: InMemoryDatabase = Depends(get_db),
    settings: ServerSettings = Depends(get_settings)
):
    """Log in with role, email and password"""
    user = db.find_user_by_email(credentials.email)
    if not user or not verify_password(credentials.password, user["password"]):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid email or password.")
    if user.get("role") != credentials.role.value:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid user role.")
    return _login_response(response, user, "User logged in successfully.", settings)


@router.get("/getuser")
async def get_user(user: dict = Depends(get_current_user)):
    """Return the authenticated user"""
    return {"success": True, "user": InMemoryDatabase.public_user(user)}


@router.get("/logout")
async def logout(response: Response, settings: ServerSettings = Depends(get_settings)):
    """End the session by clearing the cookie"""
    response.delete_cookie(settings.cookie_name)
    return {"success": True, "message": "Logged out successfully."}


@router.put("/update/profile")
async def update_profile(
    request: Request,
    user: dict = Depends(get_current_user),
    db: InMemoryDatabase = Depends(get_db)
):
    """Update profile fields and optionally replace the resume"""
    body = await read_body(request)
    resume = body.pop("resume", None)
    data = validate_body(ProfileUpdate, body)

    fields = data.model_dump(by_alias=True, exclude_none=True, exclude=set(NICHE_FIELDS))
    niches = _niches(data)
    if any(niches.values()):
        if user.get("role") == UserRole.JOB_SEEKER.value and not all(niches.values()):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Please provide your all preferred job niches."
            )
        fields["niches"] = niches
    if isinstance(resume, dict):
        fields["resume"] = resume

    updated = db.update_user(user["_id"], fields)
    return {"success": True, "user": InMemoryDatabase.public_user(updated), "message": "Profile updated."}


@router.put("/update/password")
async def update_password(
    passwords: PasswordUpdate,
    user: dict = Depends(get_current_user),
    db: InMemoryDatabase = Depends(get_db)
):
    """Change the password of the authenticated user"""
    if not verify_password(passwords.old_password, user["password"]):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Old password is incorrect.")
    if passwords.new_password != passwords.confirm_password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="New password & confirm password do not match."
        )
    updated = db.set_password(user["_id"], passwords.new_password)
    return {"success": True, "user": InMemoryDatabase.public_user(updated), "message": "Password updated."}
