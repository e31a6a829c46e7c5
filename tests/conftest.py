from __future__ import annotations

from typing import Iterator

import pytest

from utf8kit.runtime import reset_settings


@pytest.fixture(autouse=True)
def fresh_settings() -> Iterator[None]:
    reset_settings()
    yield
    reset_settings()
