"""Shared fixtures: isolate tests from the real home directory and loggers."""
import logging

import pytest

from kubenv.utils.audit_log import audit_logger
from kubenv.utils.logging_config import perf_logger


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point HOME at a scratch directory and drop kubenv environment overrides."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for name in (
        "KUBENV_CONFIG",
        "KUBENV_DIR",
        "KUBENV_KUBE_DIR",
        "KUBE_DIR",
        "KUBENV_INDEX_ACTIVE",
        "KUBENV_LOG_LEVEL",
        "KUBENV_LOG_FILE",
        "KUBENV_AUDIT_LOG",
    ):
        monkeypatch.delenv(name, raising=False)
    yield home

    for logger in (logging.getLogger("kubenv"), perf_logger, audit_logger):
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
    audit_logger.addHandler(logging.NullHandler())
    audit_logger.propagate = False
    perf_logger.propagate = True


@pytest.fixture
def kube_dir(tmp_path):
    path = tmp_path / "kube"
    path.mkdir()
    return path


@pytest.fixture
def profile_dir(kube_dir):
    return kube_dir / "kubenv"
