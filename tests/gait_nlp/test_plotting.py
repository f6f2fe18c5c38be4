from unittest import TestCase

import numpy as np

from gait_nlp.models import create_monoped_model
from gait_nlp.motion_optimizer_facade import MotionOptimizerFacade
from gait_nlp.plotting import get_contact_intervals, plot_robot_trajectory
from gait_nlp.optimization_parameters import OptimizationParameters
from tests.test_util import *


class TestPlotting(TestCase):

	def test_contact_intervals(self):
		t_vals = np.arange(6) * 0.1
		intervals = get_contact_intervals(t_vals, [True, True, False, False, True, True])
		self.assertEqual(len(intervals), 2)
		np.testing.assert_allclose(intervals[0], (0.0, 0.2))
		np.testing.assert_allclose(intervals[1], (0.4, 0.5))
		self.assertEqual(get_contact_intervals(t_vals, [False]*6), [])

	def test_plot_initial_guess(self):
		params = OptimizationParameters(ee_phases=[create_walking_phases()])
		facade = MotionOptimizerFacade(model=create_monoped_model(), params=params)
		trajectory = facade.build_trajectory(facade.build_variables(), 0.05)
		fig = plot_robot_trajectory(trajectory, show_plot=False, title='initial guess')
		self.assertEqual(len(fig.axes), 2 + 1)
		save_fig(self)
