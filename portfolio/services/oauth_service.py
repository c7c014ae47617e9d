import logging
from urllib.parse import urlencode

import httpx

from portfolio.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

GOOGLE_AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"
OAUTH_SCOPES = "openid email profile"


class OAuthError(Exception):
    pass


class GoogleOAuthClient:
    """Authorization-code flow against Google; yields the signed-in user's email."""

    def __init__(self, settings: Settings | None = None, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings or get_settings()
        self._transport = transport

    def authorization_url(self, state: str) -> str:
        query = {
            "client_id": self.settings.google_client_id,
            "redirect_uri": self.settings.google_redirect_uri,
            "response_type": "code",
            "scope": OAUTH_SCOPES,
            "state": state,
            "prompt": "select_account",
        }
        return f"{GOOGLE_AUTHORIZE_URL}?{urlencode(query)}"

    async def fetch_email(self, code: str) -> str:
        async with httpx.AsyncClient(timeout=30, transport=self._transport) as client:
            try:
                token_response = await client.post(
                    GOOGLE_TOKEN_URL,
                    data={
                        "code": code,
                        "client_id": self.settings.google_client_id,
                        "client_secret": self.settings.google_client_secret,
                        "redirect_uri": self.settings.google_redirect_uri,
                        "grant_type": "authorization_code",
                    },
                )
                token_response.raise_for_status()
                access_token = token_response.json().get("access_token")
                if not access_token:
                    raise OAuthError("Token response did not include an access token")

                userinfo = await client.get(
                    GOOGLE_USERINFO_URL, headers={"Authorization": f"Bearer {access_token}"}
                )
                userinfo.raise_for_status()
            except httpx.HTTPStatusError as e:
                logger.error(f"OAuth request rejected: {e.response.status_code} - {e.response.text}")
                raise OAuthError(f"Identity provider returned {e.response.status_code}") from e
            except httpx.HTTPError as e:
                logger.error(f"OAuth request failed: {type(e).__name__}: {e}")
                raise OAuthError(f"Identity provider unreachable: {e}") from e

        profile = userinfo.json()
        email = profile.get("email")
        if not email or profile.get("email_verified") is False:
            raise OAuthError("Identity provider did not return a verified email")
        return email


def get_oauth_client() -> GoogleOAuthClient:
    return GoogleOAuthClient()
