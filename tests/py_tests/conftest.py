import os
import sys
from pathlib import Path
from typing import Generator

import pytest

from searchsuite_client.config import Config
from searchsuite_client.logging.logger import _ctx

from .fakes import FakeBuilder, FakeEngine


@pytest.fixture(scope="session", autouse=True)
def reset_argv() -> Generator[None, None, None]:
    original_argv = sys.argv[:]
    sys.argv = ["searchsuite_client"]

    yield

    sys.argv = original_argv


@pytest.fixture(scope="session", autouse=True)
def reset_os_env() -> Generator[None, None, None]:
    original_os_env = {k: v for k, v in os.environ.items() if k.startswith("SEARCHSUITE_CLIENT_")}
    keys = original_os_env.keys()
    for k in keys:
        del os.environ[k]

    yield

    for k in keys:
        os.environ[k] = original_os_env[k]


@pytest.fixture()
def test_config(tmp_path: Path) -> Config:
    return Config(result_dir=tmp_path, timeout=12.0, connection_timeout=3.0)


@pytest.fixture()
def clean_ctx() -> Generator[None, None, None]:
    """Clean up logger context after each test."""
    yield
    _ctx.set(None)


@pytest.fixture()
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture()
def fake_builder(fake_engine: FakeEngine) -> FakeBuilder:
    return FakeBuilder(fake_engine)
