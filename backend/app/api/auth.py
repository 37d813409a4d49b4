"""
Authentication endpoints and access guards.

Sign-in methods:
- Local email + password (bcrypt)
- Firebase: the frontend signs in with Firebase and pushes the identity here
- Google / LinkedIn OAuth (enabled only when credentials are configured)

Every method ends the same way: a row in `sessions` and an httpOnly
cookie carrying its random id.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.models.user import User, UserRole
from app.schemas.auth import (
    FirebaseSyncRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    UserResponse,
)
from app.services import oauth
from app.services.sessions import create_session, destroy_session, resolve_session, session_max_age_seconds
from app.services.users import (
    create_user,
    get_or_create_social_user,
    get_user_by_email,
    sync_firebase_user,
    verify_password,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def set_session_cookie(response: Response, sid: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=sid,
        httponly=True,  # Prevents JavaScript access (XSS protection)
        samesite="lax",  # CSRF protection
        max_age=session_max_age_seconds(),
        secure=settings.session_cookie_secure,
    )


# Authentication Dependencies
async def get_optional_user(
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> Optional[User]:
    """
    Resolve the session cookie to a user.

    Returns None for anonymous requests, unknown or expired sessions, and
    sessions whose user no longer exists.
    """
    session = await resolve_session(db, request.cookies.get(settings.session_cookie_name))
    if session is None:
        return None
    return await db.get(User, session.user_id)


async def get_current_user(
    user: Optional[User] = Depends(get_optional_user)
) -> User:
    """
    Dependency to get the authenticated user.

    Raises:
        HTTPException 401: If there is no valid session
    """
    if user is None:
        raise HTTPException(status_code=401, detail="Unauthorized: Please log in")
    return user


def _require_role(role: UserRole, label: str):
    async def guard(user: Optional[User] = Depends(get_optional_user)) -> User:
        # Anonymous callers get 403 as well, same as a wrong role
        if user is None or user.role != role:
            who = user.email if user else "anonymous"
            logger.warning(f"Denied {label} access to {who}")
            raise HTTPException(status_code=403, detail=f"Forbidden: {label} access required")
        return user

    guard.__name__ = f"require_{role.value}"
    return guard


require_employer = _require_role(UserRole.EMPLOYER, "Employer")
require_job_seeker = _require_role(UserRole.JOB_SEEKER, "Job seeker")
require_admin = _require_role(UserRole.ADMIN, "Admin")


# Endpoints
@router.post("/register", response_model=UserResponse, status_code=201)
async def register(
    request: RegisterRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Create a local account (job seeker or employer).

    Returns:
        201: The new user (without password)
        400: Email already in use, or invalid body
    """
    if await get_user_by_email(db, request.email):
        logger.warning(f"Registration with existing email: {request.email}")
        raise HTTPException(status_code=400, detail="Email already in use")

    user = await create_user(
        db,
        email=request.email,
        full_name=request.full_name,
        role=UserRole(request.role),
        password=request.password,
        phone=request.phone,
    )
    return user


@router.post("/login", response_model=UserResponse)
async def login(
    request: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db)
):
    """
    Log in with email and password and open a session.

    Returns:
        200: The user; session cookie set
        401: Unknown email or wrong password
    """
    user = await get_user_by_email(db, request.email)
    if user is None or not verify_password(request.password, user.password):
        logger.warning(f"Failed login for {request.email}")
        raise HTTPException(status_code=401, detail="Invalid email or password")

    session = await create_session(db, user, method="password")
    set_session_cookie(response, session.sid)

    logger.info(f"Successful login: {user.email}")
    return user


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db)
):
    """Destroy the current session (if any) and clear the cookie."""
    await destroy_session(db, request.cookies.get(settings.session_cookie_name))
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        samesite="lax"
    )
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.post("/firebase-sync", response_model=UserResponse)
async def firebase_sync(
    request: FirebaseSyncRequest,
    response: Response,
    db: AsyncSession = Depends(get_db)
):
    """
    Sync a Firebase sign-in into a local account and open a session.

    The identity is taken as submitted by the frontend. An existing
    account with the same email gets the Firebase uid linked.

    Returns:
        200: The user; session cookie set
        400: email or firebaseUid missing
    """
    if not request.email or not request.firebase_uid:
        raise HTTPException(status_code=400, detail="Missing required user data")

    user = await sync_firebase_user(
        db,
        firebase_uid=request.firebase_uid,
        email=request.email,
        display_name=request.display_name,
        photo_url=request.photo_url,
        role=UserRole(request.role),
    )
    session = await create_session(db, user, method="firebase")
    set_session_cookie(response, session.sid)
    return user


def _enabled_provider(provider_name: str) -> oauth.OAuthProvider:
    provider = oauth.get_provider(provider_name)
    if provider is None:
        raise HTTPException(status_code=404, detail=f"{provider_name} sign-in is not available")
    return provider


@router.get("/{provider_name}")
async def oauth_start(provider_name: str):
    """Redirect to the provider's consent page (404 when the provider is not configured)."""
    provider = _enabled_provider(provider_name)
    state = oauth.new_state()

    response = RedirectResponse(oauth.authorization_url(provider, state), status_code=302)
    response.set_cookie(
        key=oauth.STATE_COOKIE,
        value=state,
        httponly=True,
        samesite="lax",
        max_age=600,
        secure=settings.session_cookie_secure,
    )
    return response


@router.get("/{provider_name}/callback")
async def oauth_callback(
    provider_name: str,
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    db: AsyncSession = Depends(get_db)
):
    """
    Finish the OAuth flow: check state, exchange the code, sign the user in.

    Always redirects to the frontend; failures land on the login page.
    """
    provider = _enabled_provider(provider_name)
    failure = RedirectResponse(f"{settings.get_frontend_url()}/login?error={provider.name}", status_code=302)

    expected_state = request.cookies.get(oauth.STATE_COOKIE)
    if not code or not state or state != expected_state:
        logger.warning(f"{provider.name} OAuth callback with missing code or bad state")
        return failure

    try:
        profile = await oauth.fetch_profile(provider, code)
    except oauth.OAuthError as e:
        logger.warning(str(e))
        return failure

    user = await get_or_create_social_user(db, profile.email, profile.full_name, profile.picture)
    session = await create_session(db, user, method=provider.name)

    response = RedirectResponse(f"{settings.get_frontend_url()}/", status_code=302)
    set_session_cookie(response, session.sid)
    response.delete_cookie(key=oauth.STATE_COOKIE)

    logger.info(f"Successful {provider.name} login: {user.email}")
    return response
