# backend/bugtracker/api/auth_routes.py

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import BaseModel, ConfigDict

from bugtracker.api.deps_auth import get_current_user, get_directory, get_settings, require_admin
from bugtracker.core.config import Settings
from bugtracker.core.security import create_access_token
from bugtracker.models.records import Account, Role
from bugtracker.services.directory import Directory

router = APIRouter()


class LoginIn(BaseModel):
    username: str
    password: str


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    username: str
    role: Role


class LoginOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


class RegisterIn(BaseModel):
    username: str
    password: str
    role: Role


def _login(directory: Directory, settings: Settings, username: str, password: str) -> LoginOut:
    user = directory.authenticate(username, password)
    token = create_access_token({"sub": user.username, "role": user.role.value}, settings)
    return LoginOut(access_token=token, user=UserOut.model_validate(user))


# JSON login
@router.post("/login", response_model=LoginOut)
def login(
    payload: LoginIn,
    directory: Directory = Depends(get_directory),
    settings: Settings = Depends(get_settings),
):
    return _login(directory, settings, payload.username.strip(), payload.password)


# OAuth2 form endpoint (Swagger Authorize uses this)
@router.post("/token", response_model=LoginOut)
def token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    directory: Directory = Depends(get_directory),
    settings: Settings = Depends(get_settings),
):
    return _login(directory, settings, (form_data.username or "").strip(), form_data.password or "")


@router.get("/me", response_model=UserOut)
def me(current_user: Account = Depends(get_current_user)):
    return UserOut.model_validate(current_user)


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterIn,
    directory: Directory = Depends(get_directory),
    admin: Account = Depends(require_admin),
):
    user = directory.register(admin, payload.username, payload.password, payload.role)
    return UserOut.model_validate(user)
