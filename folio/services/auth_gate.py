"""Authentication gate for protected endpoints."""

from typing import Annotated

from fastapi import Depends, Request

from folio.errors import Unauthenticated


async def require_user(request: Request) -> str:
    """
    Resolve the caller's user id from the token header.

    The signed payload is trusted as is; the user record is not looked up,
    so a token stays valid until it expires even if its user is deleted.

    Raises:
        Unauthenticated: If the header is missing or the token does not verify
    """
    settings = request.app.state.settings
    token = request.headers.get(settings.auth_header)
    if not token:
        raise Unauthenticated("No token, authorization denied")

    user_id = request.app.state.token_codec.verify(token)
    if user_id is None:
        raise Unauthenticated("Token is not valid")

    request.state.user_id = user_id
    return user_id


CurrentUser = Annotated[str, Depends(require_user)]
