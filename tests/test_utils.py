import os
import string

from meshctl.utils import expand_path, random_str


def test_random_str() -> None:
    assert len(random_str()) == 5
    assert len(random_str(8)) == 8

    allowed = set(string.ascii_letters + string.digits)
    assert set(random_str(100)) <= allowed


def test_expand_path() -> None:
    assert expand_path("~/auth.json") == os.path.join(
        os.path.expanduser("~"), "auth.json"
    )
    assert os.path.isabs(expand_path("relative/path"))
