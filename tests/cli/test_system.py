from unittest.mock import patch

import pytest
from typer.testing import CliRunner

import meshctl.cli.system
from meshctl import __version__
from meshctl.cli.__main__ import cli
from meshctl.cli.system import load_settings
from meshctl.config import Settings
from meshctl.errors import ConfigError, NetworkError, ParseError, ProvisioningError

runner = CliRunner()

KUBECONFIG_PATH = "/tmp/meshery/kubeconfig.yaml"


def test_version() -> None:
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_load_settings() -> None:
    settings = load_settings("/path/to/auth.json", "http://localhost:9081/", "/tmp/x")
    assert settings == Settings(
        token_path="/path/to/auth.json",
        server_url="http://localhost:9081",
        kubeconfig_dir="/tmp/x",
    )


def test_load_settings_empty_token() -> None:
    with pytest.raises(ConfigError, match="^Token path invalid$"):
        load_settings("", "http://localhost:9081", "/tmp/meshery")


def test_config_single_context() -> None:
    with patch.object(
        meshctl.cli.system, "generate_kubeconfig", return_value=KUBECONFIG_PATH
    ) as mock_generate, patch.object(
        meshctl.cli.system, "list_contexts", return_value=["minikube"]
    ) as mock_list, patch.object(
        meshctl.cli.system, "set_default_context", return_value='{"status":"ok"}'
    ) as mock_set:
        result = runner.invoke(
            cli, ["system", "config", "minikube", "--token", "/path/to/auth.json"]
        )

    assert result.exit_code == 0, result.output
    assert '{"status":"ok"}' in result.output
    assert "Enter choice" not in result.output

    mock_generate.assert_called_once_with("minikube", "/tmp/meshery")
    settings = mock_list.call_args[0][1]
    assert settings.token_path == "/path/to/auth.json"
    mock_list.assert_called_once_with(KUBECONFIG_PATH, settings)
    mock_set.assert_called_once_with(KUBECONFIG_PATH, "minikube", settings)


def test_config_choose_context() -> None:
    with patch.object(
        meshctl.cli.system, "generate_kubeconfig", return_value=KUBECONFIG_PATH
    ), patch.object(
        meshctl.cli.system,
        "list_contexts",
        return_value=["ctx-a", "ctx-b", "ctx-c"],
    ), patch.object(
        meshctl.cli.system, "set_default_context", return_value="done"
    ) as mock_set:
        result = runner.invoke(
            cli,
            [
                "system",
                "config",
                "gke",
                "--token",
                "/path/to/auth.json",
                "--server-url",
                "http://127.0.0.1:9081",
            ],
            input="2\n",
        )

    assert result.exit_code == 0, result.output
    settings = mock_set.call_args[0][2]
    assert settings.server_url == "http://127.0.0.1:9081"
    mock_set.assert_called_once_with(KUBECONFIG_PATH, "ctx-b", settings)


def test_config_empty_token() -> None:
    with patch.object(meshctl.cli.system, "generate_kubeconfig") as mock_generate:
        result = runner.invoke(cli, ["system", "config", "minikube", "--token", ""])

    assert result.exit_code == 1
    mock_generate.assert_not_called()


def test_config_invalid_provider() -> None:
    with patch("subprocess.run") as mock_run:
        result = runner.invoke(
            cli, ["system", "config", "eks", "--token", "/path/to/auth.json"]
        )

    assert result.exit_code == 1
    mock_run.assert_not_called()


def test_config_uppercase_provider() -> None:
    with patch("subprocess.run") as mock_run:
        result = runner.invoke(
            cli, ["system", "config", "GKE", "--token", "/path/to/auth.json"]
        )

    assert result.exit_code == 1
    mock_run.assert_not_called()


def test_config_requires_provider() -> None:
    result = runner.invoke(cli, ["system", "config"])
    assert result.exit_code != 0


def test_config_no_contexts() -> None:
    with patch.object(
        meshctl.cli.system, "generate_kubeconfig", return_value=KUBECONFIG_PATH
    ), patch.object(meshctl.cli.system, "list_contexts", return_value=[]), patch.object(
        meshctl.cli.system, "set_default_context"
    ) as mock_set:
        result = runner.invoke(
            cli, ["system", "config", "minikube", "--token", "/path/to/auth.json"]
        )

    assert result.exit_code == 1
    mock_set.assert_not_called()


def test_config_errors_exit() -> None:
    for error in [ProvisioningError("script failed"), NetworkError("refused")]:
        with patch.object(meshctl.cli.system, "generate_kubeconfig", side_effect=error):
            result = runner.invoke(
                cli, ["system", "config", "minikube", "--token", "/path/to/auth.json"]
            )

        assert result.exit_code == 1
        assert not isinstance(result.exception, type(error))


def test_config_parse_error_exits() -> None:
    with patch.object(
        meshctl.cli.system, "generate_kubeconfig", return_value=KUBECONFIG_PATH
    ), patch.object(
        meshctl.cli.system,
        "list_contexts",
        side_effect=ParseError("Invalid contexts response: Expecting value"),
    ), patch.object(meshctl.cli.system, "set_default_context") as mock_set:
        result = runner.invoke(
            cli, ["system", "config", "minikube", "--token", "/path/to/auth.json"]
        )

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    mock_set.assert_not_called()
