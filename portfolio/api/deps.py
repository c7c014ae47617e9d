from fastapi import Depends, HTTPException, Request
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.core.config import get_settings
from portfolio.core.security import decode_token, is_allowed_admin
from portfolio.db.session import get_session
from portfolio.schemas.auth import AdminOut
from portfolio.services.content_store import ContentStore

optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_content_store(session: AsyncSession = Depends(get_session)) -> ContentStore:
    return ContentStore(session)


async def get_current_admin(
    request: Request, token: str | None = Depends(optional_oauth2_scheme)
) -> AdminOut:
    token = token or request.cookies.get(get_settings().session_cookie_name)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    try:
        payload = decode_token(token)
    except JWTError as exc:
        raise HTTPException(status_code=401, detail="Invalid token") from exc

    # The allow-list is re-checked so removing an address revokes its sessions.
    if not is_allowed_admin(payload.sub):
        raise HTTPException(status_code=401, detail="Admin not allowed")
    return AdminOut(email=payload.sub)
