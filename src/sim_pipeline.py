"""
Python-only stand-in for the slider front end:
- Hold the current dirt and grease readings
- Re-run the fuzzy controller whenever either one changes
- Report wash time, dominant output term and whether any rule fired
"""
from typing import List, Optional, Tuple

from wash_fuzzy import InferenceResult, WashController


class Simulator:
    def __init__(self, controller: Optional[WashController] = None, dirt: float = 0.0, grease: float = 0.0):
        self.ctrl = controller or WashController()
        self.dirt = dirt
        self.grease = grease
        self.last: Optional[InferenceResult] = None

    def set_dirt(self, value: float) -> dict:
        self.dirt = float(value)
        return self.update()

    def set_grease(self, value: float) -> dict:
        self.grease = float(value)
        return self.update()

    def step(self, dirt: float, grease: float) -> dict:
        self.dirt = float(dirt)
        self.grease = float(grease)
        return self.update()

    def update(self) -> dict:
        """
        Returns:
            dict with dirt, grease, time, label, fired
        """
        self.last = self.ctrl.infer(self.dirt, self.grease)
        label = self.last.dominant_term
        return {
            "dirt": self.dirt,
            "grease": self.grease,
            "time": self.last.output,
            "label": label.value if label else "-",
            "fired": self.last.fired,
        }


def demo():
    sim = Simulator()
    scenarios: List[Tuple[float, float]] = [
        (0, 0),        # clean load
        (50, 50),      # between small and medium
        (100, 100),    # medium everything
        (180, 40),     # muddy, little grease
        (200, 200),    # worst case
        (500, 500),    # off the scale, nothing fires
    ]

    header = f"{'dirt':>6} {'grease':>6}  {'time':>6}  {'lbl':>3}  fired"
    print(header)
    print("-" * len(header))
    for dirt, grease in scenarios:
        out = sim.step(dirt, grease)
        print(
            f"{out['dirt']:6.1f} {out['grease']:6.1f}  {out['time']:6.2f}  "
            f"{out['label']:>3s}  {out['fired']}"
        )


if __name__ == "__main__":
    demo()
