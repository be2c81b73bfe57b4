from __future__ import annotations

import os
import shlex
import subprocess
import textwrap
from enum import Enum
from typing import Union

from meshctl.constants import (
    GKE_SA_NAMESPACE,
    GKE_SA_PREFIX,
    GKE_TOKEN_WAIT_SECONDS,
    KUBECONFIG_FILE_NAME,
)
from meshctl.errors import ConfigError, ProvisioningError
from meshctl.logger import logger
from meshctl.utils import random_str


class Provider(str, Enum):
    MINIKUBE = "minikube"
    GKE = "gke"

    @classmethod
    def parse(cls, value: Union[str, "Provider"]) -> "Provider":
        try:
            return cls(value)
        except ValueError:
            choices = " | ".join(p.value for p in cls)
            raise ConfigError(
                f"The argument has to be one of {choices}, got '{value}'"
            ) from None


def minikube_script(kubeconfig_path: str) -> str:
    """
    Returns a shell script that writes the kubeconfig of the minikube context.

    The kubeconfig is minified to that context and flattened, so the
    certificates are embedded and the file can be uploaded on its own.
    """
    path = shlex.quote(kubeconfig_path)
    directory = shlex.quote(os.path.dirname(kubeconfig_path))
    return textwrap.dedent(
        f"""\
        set -e
        mkdir -p {directory}
        kubectl config view --minify --flatten --context=minikube > {path}
        echo "Kubeconfig written to {path}"
        """
    )


def gke_script(
    sa_name: str,
    namespace: str,
    kubeconfig_path: str,
    token_wait: int = GKE_TOKEN_WAIT_SECONDS,
) -> str:
    """
    Returns a shell script that writes a kubeconfig for the current GKE context.

    GKE contexts authenticate through the gcloud auth plugin, which the control
    plane does not have. The script creates a cluster-admin service account and
    writes a kubeconfig that authenticates with the token of that account.

    Args:
        sa_name (str): The name of the service account to create.
        namespace (str): The namespace of the service account.
        kubeconfig_path (str): Where to write the kubeconfig.
        token_wait (int, optional): Seconds to wait for the token before failing.

    Returns:
        str: The script.
    """
    path = shlex.quote(kubeconfig_path)
    directory = shlex.quote(os.path.dirname(kubeconfig_path))
    ca_file = shlex.quote(os.path.join(os.path.dirname(kubeconfig_path), "ca.crt"))
    sa = shlex.quote(sa_name)
    secret = shlex.quote(f"{sa_name}-token")
    binding = shlex.quote(f"{sa_name}-binding")
    ns = shlex.quote(namespace)
    return textwrap.dedent(
        f"""\
        set -e
        mkdir -p {directory}
        rm -f {path}
        kubectl -n {ns} create serviceaccount {sa}
        kubectl create clusterrolebinding {binding} --clusterrole=cluster-admin --serviceaccount={ns}:{sa}
        kubectl -n {ns} apply -f - <<EOF
        apiVersion: v1
        kind: Secret
        metadata:
          name: {secret}
          annotations:
            kubernetes.io/service-account.name: {sa}
        type: kubernetes.io/service-account-token
        EOF
        TRIES=0
        until kubectl -n {ns} get secret {secret} -o jsonpath='{{.data.token}}' | grep -q .; do
          TRIES=$((TRIES + 1))
          if [ "$TRIES" -ge {token_wait} ]; then
            echo "Timed out waiting for the token of {sa}" >&2
            exit 1
          fi
          sleep 1
        done
        TOKEN=$(kubectl -n {ns} get secret {secret} -o jsonpath='{{.data.token}}' | base64 --decode)
        CONTEXT=$(kubectl config current-context)
        CLUSTER=$(kubectl config view --minify -o jsonpath='{{.clusters[0].name}}')
        SERVER=$(kubectl config view --minify -o jsonpath='{{.clusters[0].cluster.server}}')
        kubectl config view --minify --raw -o jsonpath='{{.clusters[0].cluster.certificate-authority-data}}' | base64 --decode > {ca_file}
        export KUBECONFIG={path}
        kubectl config set-cluster "$CLUSTER" --server="$SERVER" --certificate-authority={ca_file} --embed-certs=true
        kubectl config set-credentials {sa} --token="$TOKEN"
        kubectl config set-context "$CONTEXT" --cluster="$CLUSTER" --user={sa} --namespace={ns}
        kubectl config use-context "$CONTEXT"
        rm -f {ca_file}
        echo "Kubeconfig written to {path}"
        """
    )


def run_script(script: str) -> None:
    """
    Runs a shell script, streaming its output to the terminal.

    Raises:
        ProvisioningError: If the shell cannot be launched or the script exits non-zero.
    """
    try:
        subprocess.run(["sh", "-c", script], check=True)
    except subprocess.CalledProcessError as e:
        raise ProvisioningError(
            f"Error generating config: script exited with status {e.returncode}"
        ) from e
    except OSError as e:
        raise ProvisioningError(f"Error generating config: {e}") from e


def generate_kubeconfig(provider: Union[str, Provider], kubeconfig_dir: str) -> str:
    """
    Runs the provisioning script of a provider and returns the kubeconfig it wrote.

    Args:
        provider (Union[str, Provider]): Either "minikube" or "gke".
        kubeconfig_dir (str): The directory the script writes the kubeconfig into.

    Returns:
        str: The path of the generated kubeconfig.

    Raises:
        ConfigError: If the provider is not supported. No script is run.
        ProvisioningError: If the script fails or does not write the kubeconfig.
    """
    provider = Provider.parse(provider)
    kubeconfig_path = os.path.join(kubeconfig_dir, KUBECONFIG_FILE_NAME)

    if provider == Provider.MINIKUBE:
        script = minikube_script(kubeconfig_path)
    else:
        sa_name = GKE_SA_PREFIX + random_str(8).lower()
        logger.debug(f"Using service account {GKE_SA_NAMESPACE}/{sa_name}")
        script = gke_script(sa_name, GKE_SA_NAMESPACE, kubeconfig_path)

    logger.info(f"Generating kubeconfig for {provider.value}...")
    run_script(script)

    if not os.path.isfile(kubeconfig_path):
        raise ProvisioningError(
            f"The {provider.value} script did not write {kubeconfig_path}"
        )
    return kubeconfig_path
