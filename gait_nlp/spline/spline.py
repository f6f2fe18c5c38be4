from abc import ABC, abstractmethod

import numpy as np

from gait_nlp.state import StateLin3d
from gait_nlp.util import find_active_interval, get_interval_start_times


class Spline(ABC):
    """
    Chain of polynomials to build a trajectory.
    The polynomials follow each other without gaps, each one is evaluated with local time (t=0 at its start).
    """

    @abstractmethod
    def get_poly_durations(self) -> np.ndarray:
        pass

    @abstractmethod
    def get_polynomial(self, poly_id: int):
        """
        Get polynomial with evaluate, evaluate_dx and evaluate_ddx for local time.
        """
        pass


    def get_total_time(self) -> float:
        return float(sum(self.get_poly_durations()))

    def get_poly_count(self) -> int:
        return len(self.get_poly_durations())

    def get_poly_time_spans(self) -> list[tuple[float, float]]:
        """
        (start, end) time of each polynomial.
        """
        times = get_interval_start_times(self.get_poly_durations())
        return [(float(times[i]), float(times[i+1])) for i in range(len(times) - 1)]

    def get_active_poly(self, t: float) -> tuple[int, float]:
        return find_active_interval(self.get_poly_durations(), t)


    def evaluate(self, t: float) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Get position, velocity and acceleration at global time t.
        t outside of [0, total_time] is clamped.
        """
        poly_id, t_local = self.get_active_poly(t)
        poly = self.get_polynomial(poly_id)
        return (
            np.asarray(poly.evaluate(t_local), dtype=float),
            np.asarray(poly.evaluate_dx(t_local), dtype=float),
            np.asarray(poly.evaluate_ddx(t_local), dtype=float),
        )

    def get_point(self, t: float) -> StateLin3d:
        p, v, a = self.evaluate(t)
        return StateLin3d(p=p, v=v, a=a)
