from __future__ import annotations

import os
from typing import Any, List, Mapping, Optional, Tuple

import requests

from meshctl.errors import FileError, NetworkError


def build_upload_request(
    url: str,
    extra_fields: Optional[Mapping[str, str]],
    file_field_name: str,
    file_path: str,
) -> requests.PreparedRequest:
    """
    Builds a multipart/form-data POST request that uploads a file.

    The body holds the file part first, named `file_field_name` and carrying the
    base name of the file, followed by one part per extra field.

    Args:
        url (str): The URL the request is sent to.
        extra_fields (Optional[Mapping[str, str]]): Additional form fields.
        file_field_name (str): The form field name of the file part.
        file_path (str): The path of the file to upload.

    Returns:
        requests.PreparedRequest: The request, with a Content-Type header that
        carries the multipart boundary.

    Raises:
        FileError: If the file cannot be opened or read.
        NetworkError: If the request cannot be built.
    """
    try:
        with open(file_path, "rb") as f:
            content = f.read()
    except OSError as e:
        raise FileError(f"Cannot read {file_path}: {e}") from e

    # A None filename turns a part into a plain form field
    parts: List[Tuple[str, Tuple[Optional[str], Any]]] = [
        (file_field_name, (os.path.basename(file_path), content))
    ]
    for key, value in (extra_fields or {}).items():
        parts.append((key, (None, value)))

    try:
        return requests.Request("POST", url, files=parts).prepare()
    except (requests.RequestException, ValueError) as e:
        raise NetworkError(f"Cannot build request for {url}: {e}") from e
