from __future__ import annotations

import os

import typer
from pydantic import ValidationError

from meshctl.config import Settings
from meshctl.constants import (
    DEFAULT_KUBECONFIG_DIR,
    DEFAULT_SERVER_URL,
    DEFAULT_TOKEN_PATH,
    KUBECONFIG_DIR_ENV_VAR,
    SERVER_URL_ENV_VAR,
    TOKEN_ENV_VAR,
)
from meshctl.contexts import list_contexts, set_default_context
from meshctl.errors import ConfigError, MeshctlError
from meshctl.logger import logger
from meshctl.provision import generate_kubeconfig
from meshctl.selector import choose_context

system_app = typer.Typer()


def load_settings(token_path: str, server_url: str, kubeconfig_dir: str) -> Settings:
    """
    Builds the settings from the command line options.

    Raises:
        ConfigError: If an option is invalid, e.g. the token path is empty.
    """
    try:
        return Settings(
            token_path=token_path,
            server_url=server_url,
            kubeconfig_dir=kubeconfig_dir,
        )
    except ValidationError as e:
        messages = "; ".join(err["msg"].removeprefix("Value error, ") for err in e.errors())
        raise ConfigError(messages) from e


def configure_context(provider: str, settings: Settings) -> str:
    """
    Points the control plane at a context of the provider's cluster.

    Generates the kubeconfig, uploads it to discover its contexts, lets the
    operator pick one and activates it.

    Returns:
        str: The response of the control plane to the activation request.
    """
    kubeconfig_path = generate_kubeconfig(provider, settings.kubeconfig_dir)

    logger.info("Fetching contexts...")
    contexts = list_contexts(kubeconfig_path, settings)

    chosen = choose_context(contexts)
    logger.debug(f"Chosen context : {chosen}")

    return set_default_context(kubeconfig_path, chosen, settings)


@system_app.command()
def config(
    provider: str = typer.Argument(
        ...,
        help="The cluster provider to generate the kubeconfig for: minikube or gke.",
    ),
    token_path: str = typer.Option(
        os.getenv(TOKEN_ENV_VAR, DEFAULT_TOKEN_PATH),
        "--token",
        help="(optional) Path to the control plane auth config.",
    ),
    server_url: str = typer.Option(
        os.getenv(SERVER_URL_ENV_VAR, DEFAULT_SERVER_URL),
        "--server-url",
        help="The URL of the control plane API.",
    ),
    kubeconfig_dir: str = typer.Option(
        os.getenv(KUBECONFIG_DIR_ENV_VAR, DEFAULT_KUBECONFIG_DIR),
        "--kubeconfig-dir",
        help="The directory where the generated kubeconfig is written.",
    ),
) -> None:
    """
    Configures the Kubernetes cluster used by the control plane.
    """
    try:
        settings = load_settings(token_path, server_url, kubeconfig_dir)
        result = configure_context(provider, settings)
    except MeshctlError as e:
        logger.error(str(e))
        raise typer.Exit(1)

    # TODO: pretty print the response once the API returns a stable schema
    typer.echo(result)
