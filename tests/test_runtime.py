from __future__ import annotations

import logging
from pathlib import Path

from evs_support import runtime


def test_camera_config_path_override(monkeypatch):
    monkeypatch.delenv("EVS_CAMERA_CONFIG", raising=False)
    assert runtime.camera_config_path() == runtime.DEFAULT_CONFIG_PATH

    monkeypatch.setenv("EVS_CAMERA_CONFIG", "/tmp/cameras.json")
    assert runtime.camera_config_path() == Path("/tmp/cameras.json")


def test_enumerator_timeout_ignores_invalid_values(monkeypatch, caplog):
    monkeypatch.setenv("EVS_ENUMERATOR_TIMEOUT_S", "1.5")
    assert runtime.enumerator_timeout_s() == 1.5

    monkeypatch.setenv("EVS_ENUMERATOR_TIMEOUT_S", "soon")
    with caplog.at_level(logging.WARNING):
        assert runtime.enumerator_timeout_s() == runtime.DEFAULT_TIMEOUT_S
    assert "Invalid enumerator timeout" in caplog.text

    monkeypatch.setenv("EVS_ENUMERATOR_TIMEOUT_S", "-1")
    assert runtime.enumerator_timeout_s() == runtime.DEFAULT_TIMEOUT_S


def test_service_url_precedence(monkeypatch):
    monkeypatch.setenv("EVS_ENUMERATOR_URL", "http://fallback")
    monkeypatch.delenv("EVS_SERVICE_EVSENUMERATORV1_0_URL", raising=False)
    assert runtime.service_url("EvsEnumeratorV1_0") == "http://fallback"

    monkeypatch.setenv("EVS_SERVICE_EVSENUMERATORV1_0_URL", "http://named/")
    assert runtime.service_url("EvsEnumeratorV1_0") == "http://named"
    assert runtime.service_url("OtherService") is None


def test_log_level(monkeypatch):
    monkeypatch.delenv("EVS_LOG_LEVEL", raising=False)
    assert runtime.log_level() == "WARNING"
    monkeypatch.setenv("EVS_LOG_LEVEL", "debug")
    assert runtime.log_level() == "DEBUG"
    monkeypatch.setenv("EVS_LOG_LEVEL", "chatty")
    assert runtime.log_level() == "WARNING"


def test_enumerator_timeout_rejects_non_finite_values(monkeypatch, caplog):
    for raw in ("nan", "inf", "-inf"):
        monkeypatch.setenv("EVS_ENUMERATOR_TIMEOUT_S", raw)
        with caplog.at_level(logging.WARNING):
            assert runtime.enumerator_timeout_s() == runtime.DEFAULT_TIMEOUT_S
    assert "Out of range enumerator timeout" in caplog.text
