import random
import socket

import pytest

from missilesim.mfr_algorithm import calculate_distance, calculate_heading
from missilesim.mfr_packet import Message, MissileTrack, TargetTrack
from missilesim.mfr_sim import main, step


class NoDrift:
    """Random source whose draws cancel the drift offsets exactly."""

    def randrange(self, n):
        return n // 2


def _message(missile_lat=37.0, missile_lon=127.0):
    return Message(
        target=TargetTrack(target_id=1001, latitude=38.0, longitude=127.0, altitude=300.0),
        missile=MissileTrack(
            missile_id=2001, speed=1200.0, heading=0.0, distance_to_target=0.0,
            latitude=missile_lat, longitude=missile_lon, altitude=100.0,
        ),
    )


def test_no_drift_keeps_target():
    before = _message()
    after = step(before, NoDrift())
    assert after.target == before.target


def test_heading_and_distance_measured_before_moving():
    before = _message()
    after = step(before, NoDrift())
    m, t = before.missile, before.target
    assert after.missile.heading == pytest.approx(
        calculate_heading(m.latitude, m.longitude, t.latitude, t.longitude)
    )
    assert after.missile.distance_to_target == pytest.approx(
        calculate_distance(m.latitude, m.longitude, t.latitude, t.longitude)
    )


def test_missile_closes_on_target_to_the_north():
    before = _message()
    after = step(before, NoDrift())
    assert after.missile.latitude > before.missile.latitude
    assert after.missile.longitude == pytest.approx(before.missile.longitude)
    assert before.missile.altitude < after.missile.altitude < before.target.altitude
    assert after.missile.latitude < before.target.latitude


def test_missile_on_target_stays_put():
    before = _message(missile_lat=38.0, missile_lon=127.0)
    after = step(before, NoDrift())
    assert after.missile.latitude == before.missile.latitude
    assert after.missile.longitude == before.missile.longitude
    assert after.missile.altitude == before.missile.altitude
    assert after.missile.distance_to_target == 0.0


def test_input_is_not_mutated():
    before = _message()
    snapshot = Message.unpack(before.pack())
    step(before, random.Random(1))
    assert Message.unpack(before.pack()) == snapshot


def test_drift_stays_within_bounds():
    rng = random.Random(7)
    message = _message()
    for _ in range(50):
        after = step(message, rng)
        assert abs(after.target.latitude - message.target.latitude) <= 50 * 0.00001 + 1e-12
        assert abs(after.target.longitude - message.target.longitude) <= 50 * 0.00001 + 1e-12
        climb = (after.target.altitude - message.target.altitude) / 0.5
        assert climb == pytest.approx(round(climb))
        assert -10 <= round(climb) < 10
        message = after


def test_main_sends_a_report(tmp_path):
    config = tmp_path / "config.ini"
    config.write_text(
        "[Target]\ntargetId = 1001\nlatitude = 37.5665\nlongitude = 126.9780\naltitude = 300.0\n"
        "[Missile]\nmissileId = 2001\nspeed = 1200.0\nheading = 0.0\ndistanceToTarget = 0.0\n"
        "latitude = 37.5600\nlongitude = 126.9700\naltitude = 100.0\n",
        encoding="utf-8",
    )
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as receiver:
        receiver.bind(("127.0.0.1", 0))
        receiver.settimeout(5)
        port = receiver.getsockname()[1]
        result = main([
            "--config", str(config), "--port", str(port),
            "--count", "1", "--interval", "0", "--seed", "3",
        ])
        data, _ = receiver.recvfrom(1024)
    assert result == 0
    report = Message.unpack(data)
    assert report.target.target_id == 1001
    assert report.missile.missile_id == 2001


def test_main_fails_without_config(tmp_path):
    assert main(["--config", str(tmp_path / "absent.ini"), "--count", "1"]) == 1