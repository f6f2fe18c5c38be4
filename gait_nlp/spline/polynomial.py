import numpy as np


class Polynomial():
    """
    Polynomial of a given order in monomial form: x(t) = sum_k coefficients[k] * t^k.
    Each coefficient has n_dim entries, one per output dimension.
    """

    order: int
    n_dim: int
    coefficients: np.ndarray  # shape (order+1, n_dim)


    @staticmethod
    def get_required_num_parameters(order: int, n_dim: int) -> int:
        return (order + 1) * n_dim


    def __init__(self, order: int, n_dim: int):
        assert order >= 0, "polynomial order can not be negative"
        self.order = order
        self.n_dim = n_dim
        self.coefficients = np.zeros((order + 1, n_dim))


    def set_coefficients_flat(self, values):
        """
        Set coefficients from flat array, ordered [c0 (n_dim values), c1, ...].
        """
        values = np.asarray(values, dtype=float)
        assert values.shape[0] == Polynomial.get_required_num_parameters(self.order, self.n_dim)
        self.coefficients = values.reshape(self.order + 1, self.n_dim).copy()

    def get_coefficients_flat(self) -> np.ndarray:
        return self.coefficients.reshape(-1).copy()


    def evaluate_derivative(self, t: float, derivative: int) -> np.ndarray:
        """
        Get value of the given derivative (0 -> position) at time t.
        """
        result = np.zeros(self.n_dim)
        for k in range(derivative, self.order + 1):
            # d^n/dt^n t^k = k!/(k-n)! t^(k-n)
            factor = 1.0
            for j in range(derivative):
                factor *= (k - j)
            result += factor * self.coefficients[k] * (t ** (k - derivative))
        return result

    def evaluate(self, t):
        return self.evaluate_derivative(t, 0)

    def evaluate_dx(self, t):
        return self.evaluate_derivative(t, 1)

    def evaluate_ddx(self, t):
        return self.evaluate_derivative(t, 2)
