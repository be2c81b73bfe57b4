from typing import Generator

import pytest

from meshctl.logger import setup_logger


@pytest.fixture(autouse=True)
def reset_logger() -> Generator[None, None, None]:
    # Commands run by CliRunner bind the log handler to a stream that is
    # closed once the command returns.
    yield
    setup_logger()
