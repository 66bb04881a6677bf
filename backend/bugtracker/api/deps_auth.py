# backend/bugtracker/api/deps_auth.py

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from bugtracker.core.config import Settings
from bugtracker.core.errors import NotFoundError
from bugtracker.core.permissions import require_role
from bugtracker.core.security import decode_token
from bugtracker.models.records import Account, Role
from bugtracker.services.directory import Directory
from bugtracker.services.tracker import Tracker

# Only used by Swagger UI for the "Authorize" flow.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_directory(request: Request) -> Directory:
    return request.app.state.directory


def get_tracker(request: Request) -> Tracker:
    return request.app.state.tracker


def get_current_user(
    token: str = Depends(oauth2_scheme),
    directory: Directory = Depends(get_directory),
    settings: Settings = Depends(get_settings),
) -> Account:
    cred_exc = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if not token or not isinstance(token, str):
        raise cred_exc

    try:
        payload = decode_token(token, settings)
    except ValueError:
        raise cred_exc

    # sub is the username; accounts deleted since login lose access
    sub = payload.get("sub")
    if not sub:
        raise cred_exc

    try:
        return directory.get(str(sub))
    except NotFoundError:
        raise cred_exc


def require(*roles: Role):
    def dependency(user: Account = Depends(get_current_user)) -> Account:
        return require_role(user, *roles)

    return dependency


require_admin = require(Role.ADMIN)
require_project_manager = require(Role.PROJECT_MANAGER)
require_developer = require(Role.DEVELOPER)
