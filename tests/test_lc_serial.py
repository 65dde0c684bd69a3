import pytest

from missilesim.lc_serial import LcSerial


def test_open_missing_device(tmp_path):
    port = LcSerial(str(tmp_path / "no-such-tty"))
    with pytest.raises(OSError):
        port.open()
    assert not port.is_open


def test_open_non_tty_raises(tmp_path):
    path = tmp_path / "plain"
    path.write_bytes(b"")
    port = LcSerial(str(path))
    with pytest.raises(OSError):
        port.open()
    assert not port.is_open


def test_requires_open_port():
    port = LcSerial("/dev/null")
    with pytest.raises(RuntimeError):
        port.send_message("x")
    with pytest.raises(RuntimeError):
        port.receive_message()


def test_close_without_open_leaves_port_closed(tmp_path):
    port = LcSerial(str(tmp_path / "no-such-tty"))
    port.close()
    assert not port.is_open
    with pytest.raises(RuntimeError):
        port.send_message("x")