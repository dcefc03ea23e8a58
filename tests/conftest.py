from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from _pytest.logging import LogCaptureFixture
from loguru import logger

from strata import ConfigStore

BASE_YAML = """
parent:
  child: default
  foo: bar
people:
  - id: a
    file: "{ConfigRoot}/file.ext"
  - id: b
    file: "{ConfigRoot}/file2.ext"
environment:
  test:
    parent:
      child: environment override
component:
  billing:
    parent:
      foo: component override
    environment:
      test:
        parent:
          child: component environment override
"""


@pytest.fixture
def caplog(caplog: LogCaptureFixture) -> Generator[LogCaptureFixture, None, None]:
    handler_id = logger.add(caplog.handler, format="{message}")
    yield caplog
    logger.remove(handler_id)


@pytest.fixture
def store() -> ConfigStore:
    return ConfigStore()


@pytest.fixture
def base_yaml() -> str:
    return BASE_YAML


@pytest.fixture
def config_file(tmp_path: Path, base_yaml: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(base_yaml)
    return path


@pytest.fixture
def override_file(tmp_path: Path) -> Path:
    path = tmp_path / "override.yaml"
    path.write_text("parent:\n  child: second document\nversion: 2\n")
    return path
