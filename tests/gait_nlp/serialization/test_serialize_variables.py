from unittest import TestCase

import numpy as np
import rich
import yaml

from gait_nlp.models import create_quadruped_model
from gait_nlp.motion_optimizer_facade import MotionOptimizerFacade
from gait_nlp.serialization.yaml_util import *
from gait_nlp.state import BaseState, StateLin3d


class TestSerializeVariables(TestCase):

	def create_facade(self):
		facade = MotionOptimizerFacade(model=create_quadruped_model())
		facade.final_base = BaseState(lin=StateLin3d(p=[0.3, 0.1, 0.42]))
		return facade

	def test_ndarray_yaml(self):
		array = np.array([[1.0, -2.5e-12], [np.pi, 0.1]])
		loaded = yaml.load(yaml.dump({'a': array}), Loader=yaml.Loader)['a']
		np.testing.assert_array_equal(loaded, array)
		loaded_safe = yaml.safe_load(yaml.dump({'a': array}))['a']
		np.testing.assert_array_equal(loaded_safe, array)

	def test_serialize_variables(self):
		facade = self.create_facade()
		variables = facade.build_variables()
		# values that are not the initial guess
		x = np.random.default_rng(0).uniform(0.1, 0.2, size=variables.get_rows())
		variables.set_values(x)

		serialized_solution = serialize_variables(variables)
		serialized_solution_yaml = yaml.dump(serialized_solution, indent=2)
		self.assertEqual(list(serialized_solution.keys()), [c.name for c in variables.get_variable_components()])

		# load into a new problem with the same structure
		variables_loaded = self.create_facade().build_variables()
		load_variables(variables_loaded, yaml.load(serialized_solution_yaml, Loader=yaml.Loader))
		np.testing.assert_array_equal(variables_loaded.get_values(), x)

	def test_load_missing_block(self):
		variables = self.create_facade().build_variables()
		with self.assertRaises(AssertionError):
			load_variables(variables, {'base_lin': np.zeros(3)})

	def test_save_trajectory(self):
		facade = self.create_facade()
		variables = facade.build_variables()
		trajectory = facade.build_trajectory(variables, 0.25)
		states = serialize_trajectory(trajectory)
		self.assertEqual(len(states), len(trajectory))
		rich.print(states[1])

		file_path = 'out/test_save_trajectory.yaml'
		save_yaml(dict(params=facade.params.to_dict(), trajectory=states), file_path)
		loaded = load_yaml(file_path)
		self.assertEqual(len(loaded['trajectory']), len(trajectory))
		np.testing.assert_array_equal(loaded['trajectory'][2]['base_lin']['p'], trajectory[2].base.lin.p)
		self.assertEqual(loaded['trajectory'][2]['ee_contact'], list(trajectory[2].ee_contact))
