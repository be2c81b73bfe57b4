from __future__ import annotations

import os
import random
import string


def random_str(length: int = 5) -> str:
    """
    Generate a random string of a specified length.

    The string consists of both ASCII letters (lowercase and uppercase) and digits.

    Args:
        length (int, optional): The length of the random string to be generated. Defaults to 5.

    Returns:
        str: The generated random string.
    """
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def expand_path(path: str) -> str:
    """Expand `~` and make the path absolute."""
    return os.path.abspath(os.path.expanduser(path))
