from email.message import Message
from email.parser import BytesParser
from email.policy import HTTP
from pathlib import Path
from typing import Dict, List

import pytest

from meshctl.errors import FileError
from meshctl.upload import build_upload_request

KUBECONFIG = b"""apiVersion: v1
kind: Config
current-context: minikube
contexts:
- name: minikube
  context:
    cluster: minikube
    user: minikube
"""


def parse_multipart(content_type: str, body: bytes) -> List[Message]:
    """Decodes a multipart/form-data body with the standard library parser."""
    message = BytesParser(policy=HTTP).parsebytes(
        b"Content-Type: " + content_type.encode() + b"\r\n\r\n" + body
    )
    assert message.is_multipart()
    return list(message.iter_parts())


def test_build_upload_request(tmp_path: Path) -> None:
    path = tmp_path / "kubeconfig.yaml"
    path.write_bytes(KUBECONFIG)

    request = build_upload_request(
        "http://localhost:9081/api/k8sconfig",
        {"contextName": "minikube", "other": "value"},
        "k8sfile",
        str(path),
    )

    assert request.method == "POST"
    assert request.url == "http://localhost:9081/api/k8sconfig"
    content_type = request.headers["Content-Type"]
    assert content_type.startswith("multipart/form-data; boundary=")

    assert isinstance(request.body, bytes)
    parts = parse_multipart(content_type, request.body)
    assert len(parts) == 3

    file_part = parts[0]
    assert file_part.get_param("name", header="content-disposition") == "k8sfile"
    assert file_part.get_filename() == "kubeconfig.yaml"
    assert file_part.get_payload(decode=True) == KUBECONFIG

    fields: Dict[str, str] = {}
    for part in parts[1:]:
        assert part.get_filename() is None
        name = part.get_param("name", header="content-disposition")
        fields[str(name)] = part.get_payload(decode=True).decode()
    assert fields == {"contextName": "minikube", "other": "value"}


def test_build_upload_request_without_fields(tmp_path: Path) -> None:
    path = tmp_path / "kubeconfig.yaml"
    path.write_bytes(KUBECONFIG)

    request = build_upload_request(
        "http://localhost:9081/api/k8sconfig/contexts", None, "k8sfile", str(path)
    )

    assert isinstance(request.body, bytes)
    parts = parse_multipart(request.headers["Content-Type"], request.body)
    assert len(parts) == 1
    assert parts[0].get_payload(decode=True) == KUBECONFIG


def test_build_upload_request_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileError, match="Cannot read"):
        build_upload_request(
            "http://localhost:9081/api/k8sconfig",
            None,
            "k8sfile",
            str(tmp_path / "missing.yaml"),
        )
