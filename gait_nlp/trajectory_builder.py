import numpy as np

from gait_nlp import variable_names as names
from gait_nlp.angular_state_converter import AngularStateConverter
from gait_nlp.spline.spline import Spline
from gait_nlp.state import RobotStateCartesian, BaseState
from gait_nlp.util import TIME_EPSILON
from gait_nlp.variables.composite import VariableComposite
from gait_nlp.variables.contact_schedule import ContactSchedule


class TrajectoryBuilder:
	"""
	Samples the variables of a solved (or partially solved) problem into a list of robot states.
	Reads from the composite only, calling build twice with the same values gives the same states.
	"""

	def __init__(self, ee_count: int, angular_state_converter=AngularStateConverter.get_state):
		assert ee_count > 0
		self.ee_count = ee_count
		self.angular_state_converter = angular_state_converter


	@staticmethod
	def get_sample_times(total_time: float, dt: float) -> np.ndarray:
		"""
		t = 0, dt, 2*dt, ... as long as t <= total_time + TIME_EPSILON.
		"""
		assert dt > 0, "dt needs to be positive"
		times = []
		k = 0
		t = 0.0
		while t <= total_time + TIME_EPSILON:
			times.append(t)
			k += 1
			t = k * dt
		return np.array(times)

	def build(self, variables: VariableComposite, dt: float) -> list[RobotStateCartesian]:
		# every end-effector schedule has the same total time, use the first one
		total_time = variables.get_component(names.get_ee_schedule_id(0), ContactSchedule).get_total_time()

		base_lin = variables.get_component(names.base_linear, Spline)
		base_ang = variables.get_component(names.base_angular, Spline)
		schedules = [variables.get_component(names.get_ee_schedule_id(ee), ContactSchedule) for ee in range(self.ee_count)]
		motions = [variables.get_component(names.get_ee_motion_id(ee), Spline) for ee in range(self.ee_count)]
		forces = [variables.get_component(names.get_ee_force_id(ee), Spline) for ee in range(self.ee_count)]

		trajectory = []
		for t in self.get_sample_times(total_time, dt):
			t = float(t)
			base = BaseState(
				lin=base_lin.get_point(t),
				ang=self.angular_state_converter(base_ang.get_point(t))
			)
			trajectory.append(RobotStateCartesian(
				t_global=t,
				base=base,
				ee_motion=[m.get_point(t) for m in motions],
				ee_forces=[f.evaluate(t)[0] for f in forces],
				ee_contact=[s.is_in_contact(t) for s in schedules],
			))
		return trajectory
