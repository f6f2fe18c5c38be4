from dataclasses import dataclass

import numpy as np


GRAVITY = 9.80665


@dataclass
class RobotModel:
	"""
	Read-only robot data used to build the problem.
	nominal_stance_B: nominal foot position of each end-effector relative to the base (base frame).
	force_limit: max absolute force per end-effector and dimension.
	"""
	name: str
	mass: float
	nominal_stance_B: list[np.ndarray]
	force_limit: float

	def get_ee_count(self) -> int:
		return len(self.nominal_stance_B)

	def get_ee_ids(self) -> list[int]:
		return list(range(self.get_ee_count()))

	def get_nominal_stance_in_base(self) -> list[np.ndarray]:
		return [np.array(p, dtype=float) for p in self.nominal_stance_B]

	def get_standing_z_force(self) -> float:
		"""
		Vertical force of each end-effector when all of them carry the robot equally.
		"""
		return self.mass * GRAVITY / self.get_ee_count()




def create_quadruped_model() -> RobotModel:
	x_nominal_b = 0.34
	y_nominal_b = 0.19
	z_nominal_b = -0.42
	return RobotModel(
		name='quadruped',
		mass=29.5,
		nominal_stance_B=[
			np.array([ x_nominal_b,  y_nominal_b, z_nominal_b]),	# left front
			np.array([ x_nominal_b, -y_nominal_b, z_nominal_b]),	# right front
			np.array([-x_nominal_b,  y_nominal_b, z_nominal_b]),	# left hind
			np.array([-x_nominal_b, -y_nominal_b, z_nominal_b]),	# right hind
		],
		force_limit=10000.0
	)


def create_biped_model() -> RobotModel:
	# bolt
	foot_x_offset = 0.123499
	foot_y_offset = -0.02319275
	foot_z_offset = 0.309
	return RobotModel(
		name='biped',
		mass=1.25407789,
		nominal_stance_B=[
			np.array([ foot_x_offset, foot_y_offset, -foot_z_offset]),
			np.array([-foot_x_offset, foot_y_offset, -foot_z_offset]),
		],
		force_limit=100.0
	)


def create_monoped_model() -> RobotModel:
	return RobotModel(
		name='monoped',
		mass=20.0,
		nominal_stance_B=[np.array([0.0, 0.0, -0.58])],
		force_limit=10000.0
	)
