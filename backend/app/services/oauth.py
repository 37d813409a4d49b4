"""
Social login (Google, LinkedIn) over the OAuth 2.0 authorization-code flow.

A provider is enabled only when its client id and secret are configured.
"""
import logging
import secrets
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

import httpx

from app.config import settings

logger = logging.getLogger(__name__)

STATE_COOKIE = "oauth_state"


class OAuthError(Exception):
    """Raised when the provider rejects the code or returns an unusable profile."""
    pass


@dataclass
class OAuthProvider:
    name: str
    authorize_url: str
    token_url: str
    userinfo_url: str
    scopes: tuple[str, ...]


@dataclass
class SocialProfile:
    email: str
    full_name: Optional[str] = None
    picture: Optional[str] = None


PROVIDERS = {
    "google": OAuthProvider(
        name="google",
        authorize_url="https://accounts.google.com/o/oauth2/v2/auth",
        token_url="https://oauth2.googleapis.com/token",
        userinfo_url="https://openidconnect.googleapis.com/v1/userinfo",
        scopes=("openid", "profile", "email"),
    ),
    "linkedin": OAuthProvider(
        name="linkedin",
        authorize_url="https://www.linkedin.com/oauth/v2/authorization",
        token_url="https://www.linkedin.com/oauth/v2/accessToken",
        userinfo_url="https://api.linkedin.com/v2/userinfo",
        scopes=("openid", "profile", "email"),
    ),
}


def get_provider(name: str) -> Optional[OAuthProvider]:
    """The provider config, or None when unknown or not configured."""
    provider = PROVIDERS.get(name)
    if provider is None or settings.oauth_credentials(name) is None:
        return None
    return provider


def callback_url(provider: OAuthProvider) -> str:
    return f"{settings.api_base_url.rstrip('/')}/api/auth/{provider.name}/callback"


def new_state() -> str:
    return secrets.token_urlsafe(24)


def authorization_url(provider: OAuthProvider, state: str) -> str:
    client_id, _ = settings.oauth_credentials(provider.name)
    query = urlencode({
        "response_type": "code",
        "client_id": client_id,
        "redirect_uri": callback_url(provider),
        "scope": " ".join(provider.scopes),
        "state": state,
    })
    return f"{provider.authorize_url}?{query}"


async def fetch_profile(provider: OAuthProvider, code: str) -> SocialProfile:
    """
    Exchange the authorization code and read the user's OpenID profile.

    Raises:
        OAuthError: on any HTTP failure or when the profile has no email
    """
    client_id, client_secret = settings.oauth_credentials(provider.name)

    try:
        async with httpx.AsyncClient(timeout=30) as client:
            token_response = await client.post(
                provider.token_url,
                data={
                    "grant_type": "authorization_code",
                    "code": code,
                    "redirect_uri": callback_url(provider),
                    "client_id": client_id,
                    "client_secret": client_secret,
                },
                headers={"Accept": "application/json"},
            )
            token_response.raise_for_status()
            access_token = token_response.json()["access_token"]

            profile_response = await client.get(
                provider.userinfo_url,
                headers={"Authorization": f"Bearer {access_token}"},
            )
            profile_response.raise_for_status()
            claims = profile_response.json()

    except httpx.HTTPError as e:
        logger.error(f"{provider.name} OAuth HTTP error: {e}")
        raise OAuthError(f"{provider.name} sign-in failed") from e
    except (KeyError, ValueError) as e:
        logger.error(f"{provider.name} OAuth parse error: {e}")
        raise OAuthError(f"{provider.name} sign-in failed") from e

    email = claims.get("email")
    if not email:
        raise OAuthError(f"{provider.name} did not return an email address")

    return SocialProfile(email=email, full_name=claims.get("name"), picture=claims.get("picture"))
