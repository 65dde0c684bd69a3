import pytest

from missilesim.ini_parser import IniError
from missilesim.launcher import LauncherConfig, OperationMode
from missilesim.launcher_state import LauncherState, load_launcher_config


def _write(tmp_path, text):
    path = tmp_path / "launcher_config.ini"
    path.write_text(text, encoding="utf-8")
    return path


FULL = """
[LAUNCHER]
ID = 3
X = 12697800000
Y = 3756650000
MISSILE_COUNT = 3
MISSILE_IDS = 101, 102 ,103
MODE = ENGAGEMENT
"""


def test_load_full_config(tmp_path):
    config = load_launcher_config(_write(tmp_path, FULL))
    assert config.id == 3
    assert config.x == 12697800000
    assert config.y == 3756650000
    assert config.missile_count == 3
    assert config.missile_ids == [101, 102, 103]
    assert config.mode is OperationMode.ENGAGEMENT


def test_mode_defaults_to_stop(tmp_path):
    text = "[LAUNCHER]\nID=1\nX=0\nY=0\nMISSILE_COUNT=1\nMISSILE_IDS=9\n"
    config = load_launcher_config(_write(tmp_path, text))
    assert config.mode is OperationMode.STOP
    assert config.missile_ids == [9]


def test_trailing_comma_is_ignored(tmp_path):
    text = "[LAUNCHER]\nID=1\nX=0\nY=0\nMISSILE_COUNT=2\nMISSILE_IDS=4,5,\n"
    assert load_launcher_config(_write(tmp_path, text)).missile_ids == [4, 5]


def test_empty_missile_list(tmp_path):
    text = "[LAUNCHER]\nID=1\nX=0\nY=0\nMISSILE_COUNT=0\nMISSILE_IDS=\n"
    assert load_launcher_config(_write(tmp_path, text)).missile_ids == []


def test_empty_token_in_list_is_an_error(tmp_path):
    text = "[LAUNCHER]\nID=1\nX=0\nY=0\nMISSILE_COUNT=2\nMISSILE_IDS=4,,5\n"
    with pytest.raises(ValueError):
        load_launcher_config(_write(tmp_path, text))


def test_integer_prefix_is_read(tmp_path):
    text = "[LAUNCHER]\nID=7abc\nX=-5\nY=+6\nMISSILE_COUNT=0\nMISSILE_IDS=\n"
    config = load_launcher_config(_write(tmp_path, text))
    assert (config.id, config.x, config.y) == (7, -5, 6)


def test_missing_key_is_an_error(tmp_path):
    text = "[LAUNCHER]\nX=0\nY=0\nMISSILE_COUNT=0\nMISSILE_IDS=\n"
    with pytest.raises(ValueError):
        load_launcher_config(_write(tmp_path, text))


def test_unknown_mode_is_an_error(tmp_path):
    text = "[LAUNCHER]\nID=1\nX=0\nY=0\nMISSILE_COUNT=0\nMISSILE_IDS=\nMODE=FLYING\n"
    with pytest.raises(ValueError, match="Unknown OperationMode"):
        load_launcher_config(_write(tmp_path, text))


def test_missing_section_is_an_error(tmp_path):
    with pytest.raises(IniError, match="Section not found"):
        load_launcher_config(_write(tmp_path, "[OTHER]\nA=1\n"))


def test_missing_file_is_an_error(tmp_path):
    with pytest.raises(IniError):
        load_launcher_config(tmp_path / "absent.ini")


def test_notify_passes_current_config():
    config = LauncherConfig(id=4)
    state = LauncherState(config)
    seen = []
    state.set_status_handler(seen.append)
    state.notify_status_changed()
    state.config.mode = OperationMode.MOVEMENT
    state.notify_status_changed()
    assert seen == [config, config]
    assert seen[0] is config


def test_cleared_handler_is_not_called():
    state = LauncherState()
    seen = []
    state.set_status_handler(seen.append)
    state.set_status_handler(None)
    state.notify_status_changed()
    assert seen == []
    assert state.config == LauncherConfig()