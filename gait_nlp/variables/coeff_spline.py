import numpy as np

from gait_nlp.spline.polynomial import Polynomial
from gait_nlp.spline.spline import Spline
from gait_nlp.util import get_interval_start_times
from gait_nlp.variable_names import get_coeff_poly_id
from gait_nlp.variables.variable_set import VariableSet


class PolynomialVars(VariableSet):
	"""
	The coefficients of one polynomial as optimization variables (unbounded).
	"""
	polynomial: Polynomial

	def __init__(self, name: str, polynomial: Polynomial):
		super().__init__(Polynomial.get_required_num_parameters(polynomial.order, polynomial.n_dim), name)
		self.polynomial = polynomial

	def get_values(self) -> np.ndarray:
		return self.polynomial.get_coefficients_flat()

	def set_values(self, x: np.ndarray):
		self.polynomial.set_coefficients_flat(self._check_values_size(x))


class CoeffSpline(Spline):
	"""
	Spline made of independent polynomials, each holding its own coefficients.
	Continuity between the polynomials is not enforced here, that is up to constraints.

	The spline itself is not a variable set, the coefficient blocks are (see get_poly_vars()).
	"""
	name: str

	def __init__(self, name: str, poly_durations, order: int, n_dim: int = 3):
		self.name = name
		self.poly_durations = np.array(poly_durations, dtype=float)
		assert self.poly_durations.shape[0] > 0 and np.all(self.poly_durations > 0)
		self.poly_vars = [
			PolynomialVars(get_coeff_poly_id(name, i), Polynomial(order, n_dim))
			for i in range(self.poly_durations.shape[0])
		]

	def get_poly_vars(self) -> list[PolynomialVars]:
		return self.poly_vars

	def get_poly_durations(self) -> np.ndarray:
		return self.poly_durations

	def get_polynomial(self, poly_id: int) -> Polynomial:
		return self.poly_vars[poly_id].polynomial


	def initialize_variables(self, initial_pos, final_pos):
		"""
		Set the coefficients so the spline is the straight line from initial_pos to final_pos.
		"""
		initial_pos = np.asarray(initial_pos, dtype=float)
		final_pos = np.asarray(final_pos, dtype=float)
		t_total = self.get_total_time()
		velocity = (final_pos - initial_pos) / t_total
		start_times = get_interval_start_times(self.poly_durations)
		for i, poly_vars in enumerate(self.poly_vars):
			poly = poly_vars.polynomial
			poly.coefficients[:] = 0.0
			poly.coefficients[0] = initial_pos + velocity * start_times[i]
			if poly.order >= 1:
				poly.coefficients[1] = velocity
