from __future__ import annotations

import json
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from meshctl.constants import (
    CONTEXTS_ENDPOINT,
    DEFAULT_KUBECONFIG_DIR,
    DEFAULT_SERVER_URL,
    DEFAULT_TOKEN_PATH,
    PROVIDER_COOKIE,
    SET_CONTEXT_ENDPOINT,
    TOKEN_COOKIE,
)
from meshctl.errors import AuthError
from meshctl.utils import expand_path


class MeshctlBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class Settings(MeshctlBaseModel):
    """
    Represents the settings of a `meshctl system config` run.

    The settings are resolved once by the command layer and passed to every
    operation that talks to the control plane.
    """

    model_config = ConfigDict(validate_default=True)

    token_path: str = Field(
        DEFAULT_TOKEN_PATH, description="Path to the auth config file."
    )
    server_url: str = Field(
        DEFAULT_SERVER_URL, description="Base URL of the control plane API."
    )
    kubeconfig_dir: str = Field(
        DEFAULT_KUBECONFIG_DIR,
        description="Directory where the provisioning script writes the kubeconfig.",
    )

    @field_validator("token_path", mode="before")
    def validate_token_path(cls, v: Optional[str]) -> str:
        """
        Validates the token path.

        Args:
            v (Optional[str]): The value of the token_path field.

        Returns:
            str: The absolute token path.

        Raises:
            ValueError: If the token path is empty.
        """
        if not v or not v.strip():
            raise ValueError("Token path invalid")
        return expand_path(v.strip())

    @field_validator("server_url", mode="before")
    def validate_server_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("Server URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("kubeconfig_dir", mode="before")
    def validate_kubeconfig_dir(cls, v: str) -> str:
        if not v:
            raise ValueError("Kubeconfig directory invalid")
        return expand_path(v)

    @property
    def contexts_url(self) -> str:
        return f"{self.server_url}{CONTEXTS_ENDPOINT}"

    @property
    def set_context_url(self) -> str:
        return f"{self.server_url}{SET_CONTEXT_ENDPOINT}"


class AuthConfig(BaseModel):
    """
    Represents the auth config file saved after logging in to the control plane.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    token: str = Field(..., alias=TOKEN_COOKIE, min_length=1)
    provider: Optional[str] = Field(None, alias=PROVIDER_COOKIE)


def load_auth_config(path: str) -> AuthConfig:
    """
    Loads the auth config file.

    Args:
        path (str): The path to the auth config file.

    Returns:
        AuthConfig: The credentials stored in the file.

    Raises:
        AuthError: If the file cannot be read, is not valid JSON or carries no token.
    """
    try:
        with open(path, "r") as file:
            data = json.load(file)
    except OSError as e:
        raise AuthError(f"Cannot read auth config {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise AuthError(f"Auth config {path} is not valid JSON: {e}") from e

    try:
        return AuthConfig.model_validate(data)
    except ValidationError as e:
        raise AuthError(f"Invalid auth config {path}: {e}") from e
