import pytest

from sim_pipeline import Simulator, demo
from wash_fuzzy import FALLBACK_MINUTES


@pytest.fixture
def sim():
    return Simulator()


def test_initial_state(sim):
    assert sim.dirt == 0.0
    assert sim.grease == 0.0
    assert sim.last is None


def test_each_change_reruns_inference(sim):
    first = sim.set_dirt(200)
    assert first["dirt"] == 200.0
    assert first["grease"] == 0.0
    assert first["label"] == "M"

    second = sim.set_grease(200)
    assert second["label"] == "VL"
    assert second["time"] == pytest.approx(53.5)
    assert sim.last.output == second["time"]


def test_step_sets_both(sim):
    out = sim.step(0, 0)
    assert out["label"] == "VS"
    assert out["fired"] is True


def test_nothing_fired_row(sim):
    out = sim.step(500, 500)
    assert out["time"] == FALLBACK_MINUTES
    assert out["label"] == "-"
    assert out["fired"] is False


def test_demo_prints_table(capsys):
    demo()
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].split() == ["dirt", "grease", "time", "lbl", "fired"]
    assert len(lines) == 2 + 6
    assert lines[-1].split()[-1] == "False"
