import logging
import secrets
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import RedirectResponse

from portfolio.api.deps import get_current_admin
from portfolio.core.config import get_settings
from portfolio.core.security import create_access_token, is_allowed_admin, rejection_message
from portfolio.schemas.auth import AdminOut
from portfolio.schemas.common import MessageResponse
from portfolio.services.oauth_service import GoogleOAuthClient, OAuthError, get_oauth_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Admin Auth"])

STATE_COOKIE = "oauth_state"
STATE_MAX_AGE = 600
ADMIN_PAGE = "/admin"
DASHBOARD_PAGE = "/admin/dashboard"


def _error_redirect(message: str) -> RedirectResponse:
    response = RedirectResponse(url=f"{ADMIN_PAGE}?error={quote(message)}", status_code=302)
    response.delete_cookie(STATE_COOKIE)
    return response


@router.get("/login")
async def login(oauth: GoogleOAuthClient = Depends(get_oauth_client)) -> RedirectResponse:
    state = secrets.token_urlsafe(24)
    response = RedirectResponse(url=oauth.authorization_url(state), status_code=302)
    response.set_cookie(STATE_COOKIE, state, max_age=STATE_MAX_AGE, httponly=True, samesite="lax")
    return response


@router.get("/callback")
async def callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    oauth: GoogleOAuthClient = Depends(get_oauth_client),
) -> RedirectResponse:
    if error:
        return _error_redirect(f"Login failed: {error}")
    expected_state = request.cookies.get(STATE_COOKIE)
    if not code or not state or not expected_state or not secrets.compare_digest(state, expected_state):
        raise HTTPException(status_code=400, detail="Invalid OAuth state")

    try:
        email = await oauth.fetch_email(code)
    except OAuthError as exc:
        logger.warning(f"OAuth sign-in failed: {exc}")
        return _error_redirect(f"Login failed: {exc}")

    if not is_allowed_admin(email):
        logger.warning("Rejected sign-in for %s: not in admin allow-list", email)
        return _error_redirect(rejection_message(email))

    settings = get_settings()
    response = RedirectResponse(url=DASHBOARD_PAGE, status_code=302)
    response.delete_cookie(STATE_COOKIE)
    response.set_cookie(
        settings.session_cookie_name,
        create_access_token(email),
        max_age=settings.jwt_access_token_expire_minutes * 60,
        httponly=True,
        secure=settings.environment != "development",
        samesite="lax",
    )
    logger.info("Admin signed in: %s", email)
    return response


@router.get("/me", response_model=AdminOut)
async def me(admin: AdminOut = Depends(get_current_admin)) -> AdminOut:
    return admin


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response) -> MessageResponse:
    response.delete_cookie(get_settings().session_cookie_name)
    return MessageResponse(message="Signed out")
