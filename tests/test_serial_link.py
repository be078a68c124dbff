import pytest

import serial_link
from serial_link import WasherLink


class FakeSerial:
    def __init__(self, port, baud, timeout=None):
        self.port = port
        self.baud = baud
        self.timeout = timeout
        self.written = []
        self.closed = False

    def write(self, data):
        self.written.append(data)
        return len(data)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_serial(monkeypatch):
    opened = []

    def factory(*args, **kwargs):
        s = FakeSerial(*args, **kwargs)
        opened.append(s)
        return s

    monkeypatch.setattr(serial_link.serial, "Serial", factory)
    return opened


def test_send_before_open_raises():
    link = WasherLink("/dev/null")
    with pytest.raises(RuntimeError):
        link.send_wash_time(10)


def test_send_wash_time_frame(fake_serial):
    link = WasherLink("/dev/ttyUSB0", 9600)
    link.open()
    link.send_wash_time(12.3456)
    assert fake_serial[0].written == [b"T,12.35\n"]
    assert fake_serial[0].baud == 9600


def test_open_twice_reuses_port(fake_serial):
    link = WasherLink("/dev/ttyUSB0")
    link.open()
    link.open()
    assert len(fake_serial) == 1


def test_context_manager_closes(fake_serial):
    with WasherLink("/dev/ttyUSB0") as link:
        assert link.is_open
        link.send_wash_time(5)
    assert not link.is_open
    assert fake_serial[0].written == [b"T,5.00\n"]
    assert fake_serial[0].closed
