class MeshctlError(Exception):
    """Base class for every failure reported by `meshctl system config`."""


class ConfigError(MeshctlError):
    """An invalid provider argument or an unusable setting."""


class ProvisioningError(MeshctlError):
    """The kubeconfig generation script failed to launch, exited non-zero or
    did not produce the kubeconfig file."""


class NetworkError(MeshctlError):
    """The request could not be sent or the server answered with an error."""


class AuthError(MeshctlError):
    """Credentials could not be loaded from the auth config file."""


class ReadError(MeshctlError):
    """A file or a response body could not be read."""


class FileError(ReadError):
    """A local file could not be opened or read."""


class ParseError(MeshctlError):
    """The server response is not the JSON document we expect."""


class SelectionError(MeshctlError):
    """No context could be selected."""
