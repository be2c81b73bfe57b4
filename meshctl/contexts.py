from __future__ import annotations

import json
from typing import Any, List, Mapping, Optional

import requests

from meshctl.auth import add_auth_details
from meshctl.config import Settings
from meshctl.constants import CONTEXT_NAME_FIELD, KUBECONFIG_FIELD
from meshctl.errors import NetworkError, ParseError, ReadError
from meshctl.logger import logger
from meshctl.upload import build_upload_request


def _upload_kubeconfig(
    url: str,
    kubeconfig_path: str,
    settings: Settings,
    extra_fields: Optional[Mapping[str, str]] = None,
) -> bytes:
    """
    Uploads the kubeconfig to the control plane and returns the response body.
    """
    request = build_upload_request(
        url, extra_fields, KUBECONFIG_FIELD, kubeconfig_path
    )
    add_auth_details(request, settings.token_path)

    logger.debug(f"POST {url}")
    with requests.Session() as session:
        try:
            response = session.send(request, stream=True)
        except requests.RequestException as e:
            raise NetworkError(f"Request to {url} failed: {e}") from e

        with response:
            try:
                body = response.content
            except requests.RequestException as e:
                raise ReadError(f"Cannot read response from {url}: {e}") from e

            if response.status_code >= 400:
                raise NetworkError(
                    f"{url} returned {response.status_code}: "
                    f"{body.decode('utf-8', errors='replace').strip()}"
                )
    return body


def parse_contexts(body: bytes) -> List[str]:
    """
    Extracts the context names from the body returned by the contexts endpoint.

    The body is a JSON array of objects. Each object carries the context name under
    `contextName`. Entries without a usable name are skipped.

    Args:
        body (bytes): The response body.

    Returns:
        List[str]: The context names, in the order returned by the server.

    Raises:
        ParseError: If the body is not a JSON array.
    """
    try:
        items: Any = json.loads(body)
    except ValueError as e:
        raise ParseError(f"Invalid contexts response: {e}") from e

    if not isinstance(items, list):
        raise ParseError(
            f"Invalid contexts response: expected a JSON array, got {type(items).__name__}"
        )

    contexts = []
    for item in items:
        name = item.get(CONTEXT_NAME_FIELD) if isinstance(item, dict) else None
        if not isinstance(name, str) or not name:
            logger.warning(f"Skipping entry without a context name: {item}")
            continue
        contexts.append(name)
    return contexts


def list_contexts(kubeconfig_path: str, settings: Settings) -> List[str]:
    """
    Uploads a kubeconfig to the control plane and returns the contexts it defines.

    Args:
        kubeconfig_path (str): The path of the kubeconfig file.
        settings (Settings): The server URL and the auth config path.

    Returns:
        List[str]: The context names, in the order returned by the server.
    """
    body = _upload_kubeconfig(settings.contexts_url, kubeconfig_path, settings)
    return parse_contexts(body)


def set_default_context(
    kubeconfig_path: str, context_name: str, settings: Settings
) -> str:
    """
    Tells the control plane which context of the kubeconfig to use.

    Args:
        kubeconfig_path (str): The path of the kubeconfig file.
        context_name (str): The context to activate.
        settings (Settings): The server URL and the auth config path.

    Returns:
        str: The raw response body.
    """
    body = _upload_kubeconfig(
        settings.set_context_url,
        kubeconfig_path,
        settings,
        extra_fields={CONTEXT_NAME_FIELD: context_name},
    )
    return body.decode("utf-8", errors="replace")
