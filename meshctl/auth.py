from __future__ import annotations

from requests import PreparedRequest
from requests.cookies import RequestsCookieJar

from meshctl.config import load_auth_config
from meshctl.constants import PROVIDER_COOKIE, TOKEN_COOKIE
from meshctl.errors import AuthError
from meshctl.logger import logger


def add_auth_details(request: PreparedRequest, token_path: str) -> None:
    """
    Attaches the credentials stored in the auth config file to a request.

    The token and the provider name are sent as cookies, which is how the
    control plane authenticates its own UI sessions.

    Args:
        request (PreparedRequest): The request to authenticate. It is modified in place.
        token_path (str): The path to the auth config file.

    Raises:
        AuthError: If the auth config file cannot be loaded.
    """
    if not token_path:
        raise AuthError("Token path invalid")

    auth = load_auth_config(token_path)

    jar = RequestsCookieJar()
    jar.set(TOKEN_COOKIE, auth.token)
    if auth.provider:
        jar.set(PROVIDER_COOKIE, auth.provider)

    request.prepare_cookies(jar)
    logger.debug(f"Attached credentials from {token_path}")
