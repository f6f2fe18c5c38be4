from unittest import TestCase

import numpy as np

from gait_nlp.errors import ConfigurationError
from gait_nlp.models import create_quadruped_model, create_monoped_model, create_biped_model
from gait_nlp.motion_optimizer_facade import MotionOptimizerFacade, NlpSolver
from gait_nlp.optimization_parameters import OptimizationParameters, BaseRepresentation, ConstraintName, CostName
from gait_nlp.spline.spline import Spline
from gait_nlp.state import BaseState, StateLin3d
from gait_nlp.variables.coeff_spline import CoeffSpline
from gait_nlp.variables.contact_schedule import ContactSchedule, ContactPhase
from gait_nlp.variables.node_values import NodeValues, Dx, X, Y, Z
from gait_nlp.variables.phase_nodes import EndeffectorNodes, ForceNodes
from tests.test_util import *


def create_monoped_params(**kwargs) -> OptimizationParameters:
	params = dict(
		ee_phases=[[ContactPhase(0.3, True), ContactPhase(0.2, False), ContactPhase(0.3, True)]],
		duration_base_polynomial=0.2,
		force_polynomials_per_stance_phase=2,
		constraints=[ConstraintName.TERRAIN, ConstraintName.TOTAL_TIME],
		cost_weights={CostName.FORCES: 1e-3, CostName.BASE_LIN_VEL: 1.0},
	)
	params.update(kwargs)
	return OptimizationParameters(**params)


class TestMotionOptimizerFacade(TestCase):

	def test_default_initial_state(self):
		facade = MotionOptimizerFacade()
		self.assertAlmostEqual(facade.initial_base.lin.p[Z], 0.42)
		np.testing.assert_array_equal(facade.initial_base.ang.p, np.zeros(3))
		self.assertEqual(len(facade.initial_ee_W), 4)
		for ee, p in enumerate(facade.initial_ee_W):
			self.assertEqual(p[Z], 0.0)
			np.testing.assert_allclose(p[:2], facade.model.nominal_stance_B[ee][:2])

	def test_build_variables_hermite(self):
		facade = MotionOptimizerFacade()
		variables = facade.build_variables()
		self.assertEqual(
			variables.get_component_names(),
			['base_lin', 'base_ang'] + [f'ee_{kind}_{ee}' for ee in range(4) for kind in ['schedule', 'motion', 'force']]
		)
		base_lin = variables.get_component('base_lin', NodeValues)
		self.assertEqual(base_lin.get_poly_count(), len(facade.params.get_base_poly_durations()))
		self.assertIsInstance(variables.get_component('ee_motion_2'), EndeffectorNodes)
		self.assertIsInstance(variables.get_component('ee_force_2'), ForceNodes)
		# phase timings are not optimized without the total time constraint
		self.assertNotIn(variables.get_component('ee_schedule_0'), variables.get_variable_components())

	def test_hermite_final_bounds(self):
		facade = MotionOptimizerFacade()
		facade.final_base = BaseState(
			lin=StateLin3d(p=[1.0, 0.5, 0.3]),
			ang=StateLin3d(p=[0.1, 0.2, 0.3])
		)
		variables = facade.build_variables()
		last = lambda spline: spline.get_node_count() - 1

		base_lin = variables.get_component('base_lin', NodeValues)
		lb, ub = base_lin.get_bounds()
		for dim, fixed in [(X, True), (Y, True), (Z, False)]:
			idx = base_lin.get_variable_indices(last(base_lin), Dx.POS, dim)[0]
			self.assertEqual(lb[idx] == ub[idx], fixed)
		np.testing.assert_allclose(base_lin.nodes[-1, Dx.POS], [1.0, 0.5, 0.3])

		base_ang = variables.get_component('base_ang', NodeValues)
		lb, ub = base_ang.get_bounds()
		for dim, fixed in [(X, False), (Y, False), (Z, True)]:
			idx = base_ang.get_variable_indices(last(base_ang), Dx.POS, dim)[0]
			self.assertEqual(lb[idx] == ub[idx], fixed)
		for spline in [base_lin, base_ang]:
			lb, ub = spline.get_bounds()
			for node in [0, last(spline)]:
				for dim in [X, Y, Z]:
					idx = spline.get_variable_indices(node, Dx.VEL, dim)[0]
					self.assertEqual((lb[idx], ub[idx]), (0.0, 0.0))

	def test_build_variables_coeff(self):
		params = OptimizationParameters.create_quadruped_trot()
		params.base_representation = BaseRepresentation.POLY_COEFF
		facade = MotionOptimizerFacade(params=params)
		variables = facade.build_variables()

		n_polys = len(params.get_base_poly_durations())
		names = variables.get_component_names()
		self.assertEqual(names[:n_polys + 1], [f'base_lin{i}' for i in range(n_polys)] + ['base_lin'])
		self.assertEqual(names[n_polys + 1: 2*n_polys + 2], [f'base_ang{i}' for i in range(n_polys)] + ['base_ang'])
		self.assertIsInstance(variables.get_component('base_lin', Spline), CoeffSpline)
		self.assertEqual(variables.get_variable_components()[0].get_rows(), (params.order_coeff_polys + 1) * 3)

	def test_both_base_representations_evaluate_same_time_range(self):
		for representation in BaseRepresentation:
			params = OptimizationParameters.create_quadruped_trot()
			params.base_representation = representation
			facade = MotionOptimizerFacade(params=params)
			facade.final_base = BaseState(lin=StateLin3d(p=[0.4, 0.0, 0.42]))
			variables = facade.build_variables()
			base_lin = variables.get_component('base_lin', Spline)
			self.assertAlmostEqual(base_lin.get_total_time(), params.get_total_time())
			np.testing.assert_allclose(base_lin.evaluate(0.0)[0], [0, 0, 0.42], atol=1e-12)
			np.testing.assert_allclose(base_lin.evaluate(params.get_total_time())[0], [0.4, 0, 0.42], atol=1e-9)

	def test_schedule_observers(self):
		facade = MotionOptimizerFacade(model=create_monoped_model(), params=create_monoped_params())
		variables = facade.build_variables()
		schedule = variables.get_component('ee_schedule_0', ContactSchedule)
		self.assertIn(schedule, variables.get_variable_components())
		schedule.set_values(np.array([0.4, 0.2, 0.2]))
		np.testing.assert_allclose(variables.get_component('ee_motion_0', NodeValues).get_poly_durations(), [0.4, 0.1, 0.1, 0.2])
		np.testing.assert_allclose(variables.get_component('ee_force_0', NodeValues).get_poly_durations(), [0.2, 0.2, 0.2, 0.1, 0.1])

	def test_swing_node_lifts_foot(self):
		facade = MotionOptimizerFacade()
		variables = facade.build_variables()
		motion = variables.get_component('ee_motion_0', EndeffectorNodes)

		# z positions that belong to a single node are inside a swing
		swing_z = [idx for idx, infos in enumerate(motion.get_index_map())
				   if len(infos) == 1 and infos[0].deriv == Dx.POS and infos[0].dim == Z]
		self.assertEqual(len(swing_z), 4)

		x = motion.get_values()
		x[swing_z] = 0.1
		motion.set_values(x)
		schedule = variables.get_component('ee_schedule_0', ContactSchedule)
		t_lift_off, t_touch_down = schedule.get_time_per_phase()[0], sum(schedule.get_time_per_phase()[:2])
		self.assertAlmostEqual(motion.evaluate((t_lift_off + t_touch_down) / 2)[0][Z], 0.1)
		self.assertGreater(motion.evaluate(t_lift_off + 0.01)[0][Z], 0.0)
		self.assertAlmostEqual(motion.evaluate(t_touch_down)[0][Z], 0.0)

	def test_initial_swing_height(self):
		params = create_monoped_params(init_swing_height=0.08)
		facade = MotionOptimizerFacade(model=create_monoped_model(), params=params)
		motion = facade.build_variables().get_component('ee_motion_0', EndeffectorNodes)
		self.assertEqual(motion.get_swing_node_ids(), [2])
		self.assertAlmostEqual(motion.nodes[2, Dx.POS, Z], 0.08)
		np.testing.assert_array_equal(motion.nodes[[0, 1, 3, 4], Dx.POS, Z], np.zeros(4))

	def test_biped_walk_starts_on_one_foot(self):
		facade = MotionOptimizerFacade(model=create_biped_model(), params=OptimizationParameters.create_biped_walk())
		trajectory = facade.build_trajectory(facade.build_variables(), 0.1)
		self.assertEqual(trajectory[0].get_ee_count(), 2)
		self.assertEqual(trajectory[0].ee_contact, (True, False))
		self.assertEqual(trajectory[4].ee_contact, (False, True))
		# no force on the foot in the air
		np.testing.assert_array_equal(trajectory[1].ee_forces[1], np.zeros(3))

	def test_configuration_errors(self):
		params = create_monoped_params(base_representation='spline')
		facade = MotionOptimizerFacade(model=create_monoped_model(), params=params)
		with self.assertRaises(ConfigurationError):
			facade.build_variables()

		facade = MotionOptimizerFacade(model=create_monoped_model(), params=create_monoped_params())
		with self.assertRaises(ConfigurationError):
			facade.solve_problem('gradient_descent')

		facade = MotionOptimizerFacade(model=create_monoped_model(), params=create_monoped_params(constraints=[ConstraintName.DYNAMIC]))
		with self.assertRaises(ConfigurationError):
			facade.build_problem()

	def test_build_cost_constraints(self):
		facade = MotionOptimizerFacade(model=create_monoped_model(), params=create_monoped_params())
		variables = facade.build_variables()
		constraints, costs = facade.build_cost_constraints(variables)
		self.assertEqual([c.name for c in constraints], ['terrain_0', 'total_duration_0'])
		self.assertEqual(len(costs), 1 + 3)

	def test_solve_and_get_trajectories(self):
		facade = MotionOptimizerFacade(model=create_monoped_model(), params=create_monoped_params())
		facade.final_base = BaseState(lin=StateLin3d(p=[0.2, 0.0, 0.58]))
		stats = facade.solve_problem(
			NlpSolver.IPOPT,
			solver_opts={'max_iter': 50, 'print_level': 0, 'sb': 'yes'},
			p_opts={'print_time': False}
		)
		self.assertIn('return_status', stats)

		variables = facade.nlp.variables
		final_values = variables.get_values()
		lbx, ubx = variables.get_bounds()
		self.assertTrue(np.all(final_values >= lbx - 1e-6) and np.all(final_values <= ubx + 1e-6))
		self.assertAlmostEqual(variables.get_component('ee_schedule_0', ContactSchedule).get_total_time(), 0.8, places=5)

		trajectories = facade.get_trajectories(0.1)
		self.assertGreater(len(trajectories), 0)
		self.assertEqual(len(trajectories), facade.nlp.get_iteration_count())
		for trajectory in trajectories:
			self.assertGreater(len(trajectory), 0)
			self.assertEqual(trajectory[0].t_global, 0.0)
		# extraction restores the solution
		np.testing.assert_array_equal(variables.get_values(), final_values)

		trajectory = facade.get_trajectory(0.1)
		np.testing.assert_allclose(trajectory[-1].base.lin.p[:2], [0.2, 0.0], atol=1e-6)
		np.testing.assert_allclose(trajectory[0].base.lin.p, [0.0, 0.0, 0.58], atol=1e-6)
