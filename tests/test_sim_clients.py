import math
import socket

import pytest

from missilesim.datatypes import MissileInfo, TargetInfo, decode_message
from missilesim.sim_clients import (
    build_missile_command,
    build_simulation_commands,
    build_target_command,
    missile_command_main,
    send_datagram,
    simulation_main,
    target_command_main,
)


@pytest.fixture
def receiver():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(2.0)
    yield sock
    sock.close()


def _port(sock):
    return sock.getsockname()[1]


def test_missile_command_fields():
    missile = build_missile_command()
    assert missile.missile_id == 1
    assert (missile.ls_pos_x, missile.ls_pos_y) == (50.0, 100.0)
    assert missile.speed == 300


def test_missile_command_points_at_predicted_target():
    missile = build_missile_command()
    distance = math.hypot(100.0 - missile.ls_pos_x, 700.0 - missile.ls_pos_y)
    rad = math.radians(missile.degree)
    assert missile.ls_pos_x + distance * math.cos(rad) == pytest.approx(100.0)
    assert missile.ls_pos_y + distance * math.sin(rad) == pytest.approx(700.0)


def test_target_command_fields_and_round_trip():
    target = build_target_command("bravo")
    assert target.name == "bravo"
    assert (target.pos_x, target.pos_y, target.speed, target.degree) == (100.0, 200.0, 50, 90.0)
    assert decode_message(target.serialize()) == target


def test_target_command_truncates_long_names():
    target = build_target_command("x" * 30)
    assert target.name == "x" * (TargetInfo.NAME_SIZE - 1)
    assert len(target.serialize()) == TargetInfo.SIZE


def test_simulation_commands():
    target, missile = build_simulation_commands()
    assert target.name == "alpha"
    assert (target.pos_x, target.pos_y, target.speed) == (1500.0, 1500.0, 0)
    assert (missile.ls_pos_x, missile.ls_pos_y, missile.speed) == (1000.0, 1000.0, 300)
    assert missile.degree == pytest.approx(45.0)


def test_send_datagram_delivers_packet(receiver):
    payload = build_missile_command().serialize()
    sent = send_datagram(payload, "127.0.0.1", _port(receiver))
    data, _ = receiver.recvfrom(2048)
    assert sent == len(payload)
    assert data == payload


def test_missile_command_main_sends_missile(receiver, capsys):
    assert missile_command_main(["--port", str(_port(receiver))]) == 0
    data, _ = receiver.recvfrom(2048)
    assert decode_message(data) == build_missile_command()
    assert "ID=1" in capsys.readouterr().out


def test_target_command_main_with_name(receiver):
    assert target_command_main(["--port", str(_port(receiver)), "--name", "charlie"]) == 0
    data, _ = receiver.recvfrom(2048)
    assert decode_message(data) == build_target_command("charlie")


def test_target_command_main_prompts_for_name(receiver, monkeypatch):
    monkeypatch.setattr("builtins.input", lambda prompt="": "delta")
    assert target_command_main(["--port", str(_port(receiver))]) == 0
    data, _ = receiver.recvfrom(2048)
    assert decode_message(data).name == "delta"


def test_simulation_main_sends_target_then_missile(receiver):
    assert simulation_main(["--port", str(_port(receiver))]) == 0
    first, _ = receiver.recvfrom(2048)
    second, _ = receiver.recvfrom(2048)
    target, missile = build_simulation_commands()
    assert decode_message(first) == target
    assert isinstance(decode_message(second), MissileInfo)
    assert decode_message(second) == missile


def test_missile_command_main_reports_send_failure(capsys):
    assert missile_command_main(["--host", "256.0.0.1"]) == 1
    assert "sendto failed" in capsys.readouterr().err