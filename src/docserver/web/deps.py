from typing import Annotated, cast

from fastapi import Depends, Header, Request
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer

from docserver.app import App
from docserver.core.modules.session.models import AuthToken
from docserver.core.modules.user.models import User
from docserver.errors import AuthenticationError

# Security schemes
bearer_scheme = HTTPBearer(auto_error=False)
cookie_scheme = APIKeyCookie(name="token", auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


def extract_auth_token(
    credentials: HTTPAuthorizationCredentials | None, authorization: str | None, token_cookie: str | None
) -> AuthToken | None:
    """Pick the token from a Bearer header, a bare Authorization header, or the cookie, in that order."""
    if credentials and credentials.scheme.lower() == "bearer" and credentials.credentials:
        return AuthToken(credentials.credentials)
    if authorization and " " not in authorization.strip():
        return AuthToken(authorization.strip())
    if token_cookie:
        return AuthToken(token_cookie)
    return None


async def get_current_user(
    app: Annotated[App, Depends(get_app)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
    authorization: Annotated[str | None, Header(include_in_schema=False)] = None,
    token_cookie: Annotated[str | None, Depends(cookie_scheme)] = None,
) -> User:
    """Validate the request's session token before any handler logic runs."""
    auth_token = extract_auth_token(credentials, authorization, token_cookie)
    if auth_token is None:
        raise AuthenticationError("Authorization token required")
    return await app.validate_token(auth_token)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
CurrentUserDep = Annotated[User, Depends(get_current_user)]
