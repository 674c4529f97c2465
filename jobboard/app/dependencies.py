from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Depends, HTTPException, Request, Response, status
from pydantic import BaseModel, ValidationError
from starlette.datastructures import UploadFile

from jobboard.app.database import InMemoryDatabase
from jobboard.core.config import ServerSettings
from jobboard.core.schemas import UserRole

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def get_settings(request: Request) -> ServerSettings:
    return request.app.state.settings


def get_db(request: Request) -> InMemoryDatabase:
    """Get the in-memory database attached to the application"""
    return request.app.state.db


def create_token(user_id: str, settings: ServerSettings) -> str:
    expires = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expire_days)
    return jwt.encode({"id": user_id, "exp": expires}, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def set_session_cookie(response: Response, token: str, settings: ServerSettings) -> None:
    response.set_cookie(
        settings.cookie_name,
        token,
        max_age=settings.jwt_expire_days * 24 * 60 * 60,
        httponly=True,
        samesite="lax",
    )


def get_current_user(
    request: Request,
    db: InMemoryDatabase = Depends(get_db),
    settings: ServerSettings = Depends(get_settings),
) -> dict:
    """Resolve the session cookie to a stored user"""
    token = request.cookies.get(settings.cookie_name)
    if not token:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User is not authenticated.")
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.PyJWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired session.")
    user = db.get_user(payload.get("id"))
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired session.")
    return user


def require_role(role: UserRole):
    def checker(user: dict = Depends(get_current_user)) -> dict:
        if user.get("role") != role.value:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"{user.get('role')} not allowed to access this resource.",
            )
        return user
    return checker


async def read_body(request: Request) -> dict:
    """Read a JSON or form body into a dict; uploaded files become file metadata."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        body = {}
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                body[key] = {"filename": value.filename, "contentType": value.content_type}
            else:
                body[key] = value
        return body
    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Request body must be JSON.")
    if not isinstance(body, dict):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Request body must be a JSON object.")
    return body


def validation_message(error: dict) -> str:
    """Render one pydantic error as a user-facing message."""
    field = ".".join(str(part) for part in error["loc"] if part != "body") or "body"
    if error["type"] == "missing":
        return f"Please provide {field}."
    return f"Invalid {field}: {error['msg']}"


def validate_body(model: type, body: dict) -> BaseModel:
    """Validate a request body, reporting only the first problem"""
    try:
        return model.model_validate(body)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=validation_message(e.errors()[0]),
        )
