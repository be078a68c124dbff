"""
Mamdani fuzzy controller for washing time.
Inputs:
  dirt:   amount of dirt on the load (0-200)
  grease: amount of grease on the load (0-200)
Output:
  wash time in minutes (0-60), the centroid of the aggregated output surface.
"""
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple
import logging
import math

import numpy as np

log = logging.getLogger(__name__)

SAMPLES = 120
FALLBACK_MINUTES = 30.0


class ConfigError(ValueError):
    """Raised when membership sets or the rule table are malformed."""


def tri(x: float, a: float, b: float, c: float) -> float:
    if x <= a or x >= c:
        return 0.0
    if a < x <= b:
        return (x - a) / (b - a)
    if b < x < c:
        return (c - x) / (c - b)
    # NaN fails every comparison
    return 0.0


class Dirt(str, Enum):
    SMALL = "SD"
    MEDIUM = "MD"
    LARGE = "LD"


class Grease(str, Enum):
    NONE = "NG"
    MEDIUM = "MG"
    LARGE = "LG"


class WashTime(str, Enum):
    VERY_SHORT = "VS"
    SHORT = "S"
    MEDIUM = "M"
    LONG = "L"
    VERY_LONG = "VL"


@dataclass(frozen=True)
class FuzzySet:
    name: str
    a: float
    b: float
    c: float

    def __post_init__(self):
        if not self.a <= self.b <= self.c:
            raise ConfigError(
                f"Triangle {self.name} must satisfy a <= b <= c, got ({self.a}, {self.b}, {self.c})"
            )

    def mu(self, x: float) -> float:
        return tri(x, self.a, self.b, self.c)


@dataclass(frozen=True)
class LinguisticVariable:
    """Named fuzzy sets over one quantity, with the domain used for sampling and plots."""

    name: str
    vmin: float
    vmax: float
    sets: Mapping[Enum, FuzzySet]

    def __post_init__(self):
        object.__setattr__(self, "sets", MappingProxyType(dict(self.sets)))

    @property
    def terms(self) -> List[Enum]:
        return list(self.sets)


# Input membership definitions (a, b, c)
DIRT = LinguisticVariable("dirt", 0.0, 200.0, {
    Dirt.SMALL: FuzzySet("SD", -100, 0, 100),
    Dirt.MEDIUM: FuzzySet("MD", 0, 100, 200),
    Dirt.LARGE: FuzzySet("LD", 100, 200, 300),
})

GREASE = LinguisticVariable("grease", 0.0, 200.0, {
    Grease.NONE: FuzzySet("NG", -100, 0, 100),
    Grease.MEDIUM: FuzzySet("MG", 0, 100, 200),
    Grease.LARGE: FuzzySet("LG", 100, 200, 300),
})

# Output membership definitions, minutes
WASH_TIME = LinguisticVariable("wash_time", 0.0, 60.0, {
    WashTime.VERY_SHORT: FuzzySet("VS", -10, 0, 10),
    WashTime.SHORT: FuzzySet("S", 0, 10, 25),
    WashTime.MEDIUM: FuzzySet("M", 10, 25, 40),
    WashTime.LONG: FuzzySet("L", 25, 40, 60),
    WashTime.VERY_LONG: FuzzySet("VL", 40, 60, 70),
})

# Rule base: (dirt, grease) -> wash time
RULES: Dict[Tuple[Dirt, Grease], WashTime] = {
    (Dirt.SMALL, Grease.NONE): WashTime.VERY_SHORT,
    (Dirt.SMALL, Grease.MEDIUM): WashTime.SHORT,
    (Dirt.SMALL, Grease.LARGE): WashTime.MEDIUM,
    (Dirt.MEDIUM, Grease.NONE): WashTime.SHORT,
    (Dirt.MEDIUM, Grease.MEDIUM): WashTime.MEDIUM,
    (Dirt.MEDIUM, Grease.LARGE): WashTime.LONG,
    (Dirt.LARGE, Grease.NONE): WashTime.MEDIUM,
    (Dirt.LARGE, Grease.MEDIUM): WashTime.LONG,
    (Dirt.LARGE, Grease.LARGE): WashTime.VERY_LONG,
}


def _check_variable(variable: LinguisticVariable, enum_cls) -> None:
    expected = set(enum_cls)
    present = set(variable.sets)
    missing = expected - present
    if missing:
        names = sorted(t.value for t in missing)
        raise ConfigError(f"Variable {variable.name} has no fuzzy set for {names}")
    extra = present - expected
    if extra:
        raise ConfigError(f"Variable {variable.name} has unknown terms {sorted(map(str, extra))}")
    if not variable.vmin < variable.vmax:
        raise ConfigError(
            f"Variable {variable.name} domain [{variable.vmin}, {variable.vmax}] is empty"
        )


def validate_config(
    dirt: LinguisticVariable,
    grease: LinguisticVariable,
    wash_time: LinguisticVariable,
    rules: Mapping[Tuple[Dirt, Grease], WashTime],
    samples: int,
    fallback: float,
) -> None:
    """Check every configuration invariant once, before the first inference."""
    _check_variable(dirt, Dirt)
    _check_variable(grease, Grease)
    _check_variable(wash_time, WashTime)

    expected = {(d, g) for d in Dirt for g in Grease}
    missing = expected - set(rules)
    if missing:
        names = sorted(f"({d.value}, {g.value})" for d, g in missing)
        raise ConfigError(f"Rule table has no entry for {', '.join(names)}")
    unknown = set(rules) - expected
    if unknown:
        raise ConfigError(f"Rule table has unexpected antecedents {sorted(map(str, unknown))}")
    for key, out in rules.items():
        if not isinstance(out, WashTime):
            raise ConfigError(f"Rule {key} concludes unknown term {out!r}")

    if samples < 1:
        raise ConfigError(f"Sample count must be at least 1, got {samples}")
    if not math.isfinite(fallback):
        raise ConfigError(f"Fallback must be finite, got {fallback}")


def fuzzify(x: float, variable: LinguisticVariable) -> Dict[Enum, float]:
    return {term: fs.mu(x) for term, fs in variable.sets.items()}


def evaluate_rules(
    dirt_degrees: Mapping[Dirt, float],
    grease_degrees: Mapping[Grease, float],
    rules: Mapping[Tuple[Dirt, Grease], WashTime],
    out_terms,
) -> Dict[WashTime, float]:
    """Return activation for each output term after MIN+MAX composition."""
    activations = {term: 0.0 for term in out_terms}
    for (d, g), out_term in rules.items():
        strength = min(dirt_degrees[d], grease_degrees[g])  # AND = MIN
        if strength > activations[out_term]:  # OR = MAX
            activations[out_term] = strength
    return activations


def sample_points(vmin: float, vmax: float, samples: int) -> np.ndarray:
    return np.linspace(vmin, vmax, samples + 1)


def aggregate(
    activations: Mapping[WashTime, float],
    variable: LinguisticVariable,
    samples: int = SAMPLES,
) -> List[Tuple[float, float]]:
    """Clip each output set at its activation and take the max across sets per sample."""
    surface = []
    for t in sample_points(variable.vmin, variable.vmax, samples):
        t = float(t)
        mu_t = 0.0
        for term, level in activations.items():
            mu_t = max(mu_t, min(level, variable.sets[term].mu(t)))
        surface.append((t, mu_t))
    return surface


def centroid(surface: List[Tuple[float, float]], fallback: float = FALLBACK_MINUTES) -> float:
    num = 0.0
    den = 0.0
    for t, mu_t in surface:
        num += t * mu_t
        den += mu_t
    if den == 0:
        log.warning("No rule fired, using fallback %.2f", fallback)
        return fallback
    return num / den


@dataclass(frozen=True)
class InferenceResult:
    output: float
    surface: List[Tuple[float, float]]
    dirt_degrees: Dict[Dirt, float]
    grease_degrees: Dict[Grease, float]
    activations: Dict[WashTime, float]

    @property
    def fired(self) -> bool:
        return any(level > 0 for level in self.activations.values())

    @property
    def dominant_term(self) -> Optional[WashTime]:
        if not self.fired:
            return None
        return max(self.activations.items(), key=lambda kv: kv[1])[0]


class WashController:
    def __init__(
        self,
        dirt: LinguisticVariable = DIRT,
        grease: LinguisticVariable = GREASE,
        wash_time: LinguisticVariable = WASH_TIME,
        rules: Mapping[Tuple[Dirt, Grease], WashTime] = RULES,
        samples: int = SAMPLES,
        fallback: float = FALLBACK_MINUTES,
    ):
        validate_config(dirt, grease, wash_time, rules, samples, fallback)
        self.dirt = dirt
        self.grease = grease
        self.wash_time = wash_time
        self.rules = MappingProxyType(dict(rules))
        self.samples = samples
        self.fallback = float(fallback)
        log.info(
            "Wash controller ready: %d rules, %d samples over [%g, %g]",
            len(self.rules), samples, wash_time.vmin, wash_time.vmax,
        )

    def infer(self, dirt: float, grease: float) -> InferenceResult:
        dirt_deg = fuzzify(dirt, self.dirt)
        grease_deg = fuzzify(grease, self.grease)
        log.debug("Fuzzified dirt=%.3f -> %s grease=%.3f -> %s",
                  dirt, _fmt(dirt_deg), grease, _fmt(grease_deg))

        acts = evaluate_rules(dirt_deg, grease_deg, self.rules, self.wash_time.terms)
        log.debug("Activations %s", _fmt(acts))

        surface = aggregate(acts, self.wash_time, self.samples)
        minutes = centroid(surface, self.fallback)
        log.debug("Wash time %.4f min", minutes)

        return InferenceResult(minutes, surface, dirt_deg, grease_deg, acts)


def _fmt(degrees: Mapping[Enum, float]) -> Dict[str, str]:
    return {term.value: f"{v:.3f}" for term, v in degrees.items()}


_default: Optional[WashController] = None


def infer(dirt: float, grease: float) -> InferenceResult:
    """Run the reference controller."""
    global _default
    if _default is None:
        _default = WashController()
    return _default.infer(dirt, grease)
