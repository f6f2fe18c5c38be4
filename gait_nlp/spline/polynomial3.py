import numpy as np
import numpy.typing as npt
import matplotlib.pyplot as plt


class Polynomial3():
    """
    3. degree polynomial with hermite parametrization.
    """

    # may have multiple dimension when the polynom output is also multidimensional
    x0: npt.ArrayLike
    dx0: npt.ArrayLike
    x1: npt.ArrayLike
    dx1: npt.ArrayLike

    deltaT: float


    def __init__(self, x0, dx0, x1, dx1, deltaT):
        self.x0 = np.asarray(x0, dtype=float)
        self.dx0 = np.asarray(dx0, dtype=float)
        self.x1 = np.asarray(x1, dtype=float)
        self.dx1 = np.asarray(dx1, dtype=float)
        self.deltaT = float(deltaT)
        assert self.deltaT > 0, f"polynomial duration needs to be positive, got {self.deltaT}"


    def get_coefficients(self):
        """
        Get polynom coefficients.
        Note that x0 is allways at t=0 and x1 at t=deltaT.
        """
        # Hermite Polynom parametrization
        a0 = self.x0
        a1 = self.dx0
        a2 = -(self.deltaT**(-2)) * (3*(self.x0 - self.x1) + self.deltaT*(2*self.dx0 + self.dx1))
        a3 = (self.deltaT**(-3)) * (2*(self.x0 - self.x1) + self.deltaT*(  self.dx0 + self.dx1))
        return a0, a1, a2, a3


    def evaluate(self, t):
        """
        Get polynom value at time t.
        Note that x0 is allways at t=0 and x1 at t=deltaT.
        """
        a0, a1, a2, a3 = self.get_coefficients()
        return a0 + a1*t + a2*(t**2) + a3*(t**3)

    def evaluate_dx(self, t):
        """
        Get polynom first derivative value at time t.
        """
        a0, a1, a2, a3 = self.get_coefficients()
        return a1 + 2*a2*(t**1) + 3*a3*(t**2)

    def evaluate_ddx(self, t):
        """
        Get polynom second derivative value at time t.
        """
        a0, a1, a2, a3 = self.get_coefficients()
        return 2*a2 + 2*3*a3*(t**1)


    def plot(self, t0=0, tend=None):
        if tend is None:
            tend = self.deltaT

        t_vals = np.linspace(t0, tend, 100)
        x_vals = np.array([self.evaluate(t) for t in t_vals])
        plt.plot(t_vals, x_vals)
        plt.scatter(np.zeros_like(self.x0), self.x0, c='red')
        plt.scatter(np.ones_like(self.x0)*self.deltaT, self.x1, c='red')
