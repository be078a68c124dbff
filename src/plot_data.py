"""
Chart-ready data for membership curves, input markers and the centroid.
Nothing here draws; callers hand these point lists to whatever plotting they use.
"""
from typing import Dict, List, Tuple

from wash_fuzzy import FuzzySet, InferenceResult, LinguisticVariable, WashController

Point = Tuple[float, float]

MARKER_TOP = 1.1


def curve_points(fs: FuzzySet, vmin: float, vmax: float) -> List[Point]:
    """
    Breakpoints of one triangle clipped to [vmin, vmax].

    A triangle is piecewise linear, so the domain ends plus whichever of a, b, c
    lie inside the domain are enough to draw it exactly.
    """
    xs = {float(vmin), float(vmax)}
    for p in (fs.a, fs.b, fs.c):
        if vmin <= p <= vmax:
            xs.add(float(p))
    return [(x, fs.mu(x)) for x in sorted(xs)]


def variable_curves(variable: LinguisticVariable) -> Dict[str, List[Point]]:
    return {
        term.value: curve_points(fs, variable.vmin, variable.vmax)
        for term, fs in variable.sets.items()
    }


def marker(x: float, top: float = MARKER_TOP) -> List[Point]:
    return [(x, 0.0), (x, top)]


def chart_data(result: InferenceResult, controller: WashController, dirt: float, grease: float) -> dict:
    """Everything needed to redraw the four charts after one inference."""
    return {
        "dirt": {
            "curves": variable_curves(controller.dirt),
            "marker": marker(dirt),
        },
        "grease": {
            "curves": variable_curves(controller.grease),
            "marker": marker(grease),
        },
        "wash_time": {
            "curves": variable_curves(controller.wash_time),
        },
        "result": {
            "surface": list(result.surface),
            "centroid": marker(result.output),
        },
    }
