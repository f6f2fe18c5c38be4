from unittest import TestCase

import numpy as np

from gait_nlp.variables.coeff_spline import CoeffSpline, PolynomialVars
from tests.test_util import *


class TestCoeffSpline(TestCase):

	def test_poly_vars_ids(self):
		spline = CoeffSpline('base_lin', [0.1, 0.1, 0.05], order=4)
		self.assertEqual([p.name for p in spline.get_poly_vars()], ['base_lin0', 'base_lin1', 'base_lin2'])
		self.assertEqual(spline.get_poly_vars()[0].get_rows(), 5 * 3)
		self.assertAlmostEqual(spline.get_total_time(), 0.25)

	def test_initialize_straight_line(self):
		spline = CoeffSpline('base_lin', [0.5, 0.5, 1.0], order=3)
		spline.initialize_variables(np.array([0.0, 0.0, 0.4]), np.array([2.0, 1.0, 0.4]))
		for t in [0.0, 0.25, 0.5, 0.9, 1.5, 2.0]:
			p, v, a = spline.evaluate(t)
			np.testing.assert_allclose(p, [t, 0.5*t, 0.4])
			np.testing.assert_allclose(v, [1.0, 0.5, 0.0])
			np.testing.assert_allclose(a, np.zeros(3))

	def test_coefficients_as_variables(self):
		spline = CoeffSpline('base_ang', [1.0], order=2, n_dim=1)
		poly_vars: PolynomialVars = spline.get_poly_vars()[0]
		# x(t) = 1 + 2t + 3t^2
		poly_vars.set_values(np.array([1.0, 2.0, 3.0]))
		p, v, a = spline.evaluate(0.5)
		np.testing.assert_allclose(p, [1 + 1 + 0.75])
		np.testing.assert_allclose(v, [2 + 3])
		np.testing.assert_allclose(a, [6])

		lb, ub = poly_vars.get_bounds()
		self.assertTrue(np.all(np.isinf(lb)) and np.all(np.isinf(ub)))

	def test_no_continuity_between_polynomials(self):
		spline = CoeffSpline('base_lin', [1.0, 1.0], order=1, n_dim=1)
		spline.get_poly_vars()[0].set_values(np.array([0.0, 1.0]))
		spline.get_poly_vars()[1].set_values(np.array([5.0, 0.0]))
		np.testing.assert_allclose(spline.evaluate(0.999)[0], [0.999])
		np.testing.assert_allclose(spline.evaluate(1.0)[0], [5.0])
