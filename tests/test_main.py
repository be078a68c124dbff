import json

import pytest

import main
import serial_link


def test_prints_wash_time(capsys):
    assert main.main(["--dirt", "0", "--grease", "0"]) == 0
    out = capsys.readouterr().out
    assert "-> 3.17 min (VS)" in out


def test_fallback_flag(capsys):
    assert main.main(["--dirt", "900", "--grease", "900", "--fallback", "42"]) == 0
    assert "42.00 min (-)" in capsys.readouterr().out


def test_curves_json(capsys):
    assert main.main(["--dirt", "200", "--grease", "200", "--curves"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["result"]["centroid"][0][0] == pytest.approx(53.5)
    assert len(data["result"]["surface"]) == 121
    assert set(data["wash_time"]["curves"]) == {"VS", "S", "M", "L", "VL"}


def test_bad_samples_exit_code(capsys):
    assert main.main(["--samples", "0"]) == 2
    assert "Bad configuration" in capsys.readouterr().err


def test_non_finite_input_uses_fallback(capsys):
    assert main.main(["--dirt", "inf"]) == 0
    assert "30.00 min (-)" in capsys.readouterr().out


def test_sends_over_serial(monkeypatch, capsys):
    sent = []

    class FakeSerial:
        def __init__(self, port, baud, timeout=None):
            self.port = port

        def write(self, data):
            sent.append(data)

        def close(self):
            pass

    monkeypatch.setattr(serial_link.serial, "Serial", FakeSerial)
    assert main.main(["--dirt", "200", "--grease", "200", "--port", "/dev/ttyACM0"]) == 0
    assert sent == [b"T,53.50\n"]
