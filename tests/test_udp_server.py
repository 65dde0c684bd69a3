import socket
import threading

import pytest

from missilesim.udp_server import BUFFER_SIZE, UDPServer


@pytest.fixture
def server():
    srv = UDPServer(0, host="127.0.0.1", timeout=0.2)
    yield srv
    srv.close()


def _send(payload, address):
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.sendto(payload, address)


def test_serve_once_passes_datagram_to_handler(server):
    received = []
    server.set_message_handler(received.append)
    _send(b"\x01\x02\x03", server.address)
    assert server.serve_once() == b"\x01\x02\x03"
    assert received == [b"\x01\x02\x03"]


def test_default_handler_prints_bytes(server, capsys):
    _send(bytes([1, 2, 255]), server.address)
    server.serve_once()
    assert capsys.readouterr().out == "Received data: 1 2 255\n"


def test_serve_once_times_out_with_none(server):
    assert server.serve_once() is None


def test_datagram_truncated_to_buffer_size(server):
    received = []
    server.set_message_handler(received.append)
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.sendto(b"x" * (BUFFER_SIZE + 100), server.address)
    try:
        data = server.serve_once()
    except OSError:
        data = None
    # Some platforms drop or flag oversized reads; whatever arrives fits the buffer.
    assert data is None or len(data) <= 1024


def test_start_runs_until_stop(server):
    got = threading.Event()
    received = []

    def handler(data):
        received.append(data)
        got.set()

    server.set_message_handler(handler)
    thread = threading.Thread(target=server.start)
    thread.start()
    _send(b"ping", server.address)
    assert got.wait(5)
    server.stop()
    thread.join(5)
    assert not thread.is_alive()
    assert received == [b"ping"]


def test_serve_after_close_raises():
    srv = UDPServer(0, host="127.0.0.1", timeout=0.1)
    srv.close()
    with pytest.raises(OSError):
        srv.serve_once()


def test_bind_conflict_raises_oserror(server):
    with pytest.raises(OSError):
        UDPServer(server.port, host="127.0.0.1")


def test_context_manager_closes_socket():
    with UDPServer(0, host="127.0.0.1", timeout=0.1) as srv:
        port = srv.port
    assert port > 0
    with pytest.raises(OSError):
        srv.serve_once()