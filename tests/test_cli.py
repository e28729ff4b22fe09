from __future__ import annotations

import json
import logging

import pytest

import evs_camera
from core.resolver import EnumeratedDevice


class _FakeEnumerator:
    def __init__(self, camera_ids):
        self._cameras = [EnumeratedDevice(camera_id) for camera_id in camera_ids]
        self.closed = False

    def get_camera_list(self):
        return list(self._cameras)

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "camera_config.json"
    path.write_text(
        json.dumps(
            {
                "cameras": [
                    {"cameraId": "cam-rear", "function": "reverse"},
                    {"cameraId": "cam-front", "function": "front"},
                ]
            }
        ),
        encoding="utf-8",
    )
    return path


def test_parse_args_defaults():
    args = evs_camera.parse_args([])
    assert args.function == "reverse"
    assert args.service == "EvsEnumeratorV1_0"
    assert args.config is None
    assert args.list is False


def test_main_prints_resolved_camera(config_file, mocker, capsys):
    enumerator = _FakeEnumerator(["cam-front", "cam-rear"])
    get_service = mocker.patch("evs_camera.get_service", return_value=enumerator)

    code = evs_camera.main(["--config", str(config_file), "--timeout", "0.5"])

    assert code == 0
    assert capsys.readouterr().out.strip() == "cam-rear"
    get_service.assert_called_once_with("EvsEnumeratorV1_0", timeout_s=0.5)
    assert enumerator.closed is True


def test_main_not_found_exit_code(config_file, mocker, capsys):
    mocker.patch("evs_camera.get_service", return_value=_FakeEnumerator(["cam-rear"]))

    code = evs_camera.main(["--config", str(config_file), "--function", "left"])

    assert code == 1
    assert capsys.readouterr().out == ""


def test_main_unregistered_service(config_file, mocker):
    mocker.patch("evs_camera.get_service", return_value=None)
    assert evs_camera.main(["--config", str(config_file)]) == 1


def test_main_lists_configured_cameras(config_file, capsys):
    code = evs_camera.main(["--config", str(config_file), "--list", "--log-level", "error"])

    assert code == 0
    lines = capsys.readouterr().out.splitlines()
    assert [line.split("(", 1)[0] for line in lines] == ["cam-rear", "cam-front"]


def test_main_reports_missing_configuration_before_service(tmp_path, mocker, caplog):
    get_service = mocker.patch("evs_camera.get_service", return_value=None)

    with caplog.at_level(logging.ERROR):
        code = evs_camera.main(["--config", str(tmp_path / "absent.json")])

    assert code == 1
    get_service.assert_not_called()
    assert "Missing or improper configuration" in caplog.text
    assert "is not registered" not in caplog.text
