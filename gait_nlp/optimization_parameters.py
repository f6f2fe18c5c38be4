from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import yaml

from gait_nlp.variables.contact_schedule import ContactPhase


class BaseRepresentation(Enum):
	CUBIC_HERMITE = 'cubic_hermite'
	POLY_COEFF = 'poly_coeff'


class ConstraintName(Enum):
	DYNAMIC = 'dynamic'
	ENDEFFECTOR_ROM = 'endeffector_rom'
	TOTAL_TIME = 'total_time'
	TERRAIN = 'terrain'
	FORCE = 'force'
	SWING = 'swing'
	BASE_ROM = 'base_rom'
	BASE_ACC = 'base_acc'


class CostName(Enum):
	FORCES = 'forces'
	EE_MOTION = 'ee_motion'
	BASE_LIN_VEL = 'base_lin_vel'


@dataclass
class OptimizationParameters:
	"""
	Parameters that define the structure of the optimization problem.
	ee_phases: initial contact/flight phases of each end-effector, all end-effectors need the same total time.
	"""
	ee_phases: list[list[ContactPhase]]
	min_phase_duration: float = 0.1
	max_phase_duration: float = 2.0
	force_polynomials_per_stance_phase: int = 3
	# two are enough to lift the foot
	motion_polynomials_per_swing_phase: int = 2
	# initial guess of the foot height in the middle of a swing
	init_swing_height: float = 0.0
	duration_base_polynomial: float = 0.1
	order_coeff_polys: int = 4
	base_representation: BaseRepresentation = BaseRepresentation.CUBIC_HERMITE
	constraints: list[ConstraintName] = field(default_factory=lambda: [ConstraintName.TERRAIN])
	cost_weights: dict[CostName, float] = field(default_factory=dict)


	def get_ee_count(self) -> int:
		return len(self.ee_phases)

	def get_total_time(self) -> float:
		return sum(p.duration for p in self.ee_phases[0])

	def get_base_poly_durations(self) -> list[float]:
		"""
		Split the total time into polynomials of duration_base_polynomial, the last one takes the rest.
		"""
		durations = []
		dt = self.duration_base_polynomial
		t_left = self.get_total_time()
		eps = 1e-10  # since repeated subtraction causes inaccuracies
		while t_left > eps:
			durations.append(dt if t_left > dt else t_left)
			t_left -= dt
		return durations

	def constraint_exists(self, name: ConstraintName) -> bool:
		return name in self.constraints

	def optimize_phase_timings(self) -> bool:
		return self.constraint_exists(ConstraintName.TOTAL_TIME)

	def get_used_constraints(self) -> list[ConstraintName]:
		return list(self.constraints)

	def get_cost_weights(self) -> dict[CostName, float]:
		return dict(self.cost_weights)


	def to_dict(self) -> dict:
		return dict(
			ee_phases=[[dict(duration=float(p.duration), in_contact=p.in_contact) for p in phases] for phases in self.ee_phases],
			min_phase_duration=self.min_phase_duration,
			max_phase_duration=self.max_phase_duration,
			force_polynomials_per_stance_phase=self.force_polynomials_per_stance_phase,
			motion_polynomials_per_swing_phase=self.motion_polynomials_per_swing_phase,
			init_swing_height=self.init_swing_height,
			duration_base_polynomial=self.duration_base_polynomial,
			order_coeff_polys=self.order_coeff_polys,
			base_representation=self.base_representation.value,
			constraints=[c.value for c in self.constraints],
			cost_weights={c.value: float(w) for c, w in self.cost_weights.items()},
		)

	@staticmethod
	def from_dict(params: dict) -> 'OptimizationParameters':
		params = dict(params)
		params['ee_phases'] = [[ContactPhase(**p) for p in phases] for phases in params['ee_phases']]
		if 'base_representation' in params:
			params['base_representation'] = BaseRepresentation(params['base_representation'])
		if 'constraints' in params:
			params['constraints'] = [ConstraintName(c) for c in params['constraints']]
		if 'cost_weights' in params:
			params['cost_weights'] = {CostName(c): w for c, w in params['cost_weights'].items()}
		return OptimizationParameters(**params)

	def to_yaml(self, file_path: str | Path = None) -> str:
		yaml_str = yaml.dump(self.to_dict(), indent=2, sort_keys=False)
		if file_path is not None:
			Path(file_path).write_text(yaml_str)
		return yaml_str

	@staticmethod
	def from_yaml(file_path: str | Path) -> 'OptimizationParameters':
		with open(file_path, 'r') as f:
			return OptimizationParameters.from_dict(yaml.safe_load(f))


	########
	# presets
	@staticmethod
	def create_quadruped_trot(total_duration: float = 2.0, num_steps: int = 4) -> 'OptimizationParameters':
		"""
		Trot: diagonal legs step together, start and end with all feet on the ground.
		"""
		stand = 0.3
		step = (total_duration - 2*stand) / (2*num_steps)
		# second diagonal pair lifts its feet when the first pair touches down
		phases_a = [ContactPhase(stand, True)]
		phases_b = [ContactPhase(stand + step, True)]
		for i in range(num_steps - 1):
			phases_a += [ContactPhase(step, False), ContactPhase(step, True)]
			phases_b += [ContactPhase(step, False), ContactPhase(step, True)]
		phases_a += [ContactPhase(step, False), ContactPhase(step + stand, True)]
		phases_b += [ContactPhase(step, False), ContactPhase(stand, True)]
		return OptimizationParameters(
			ee_phases=[phases_a, phases_b, phases_b, phases_a],
			constraints=[ConstraintName.TERRAIN],
			cost_weights={CostName.FORCES: 1e-4},
		)

	@staticmethod
	def create_biped_walk(total_duration: float = 1.5, num_steps: int = 5) -> 'OptimizationParameters':
		"""
		Both feet alternate between contact and flight, the second foot starts in flight.
		"""
		step = total_duration / num_steps
		phases_left = [ContactPhase(step, i % 2 == 0) for i in range(num_steps)]
		phases_right = [ContactPhase(step, i % 2 == 1) for i in range(num_steps)]
		return OptimizationParameters(
			ee_phases=[phases_left, phases_right],
			min_phase_duration=0.05,
			max_phase_duration=1.0,
			constraints=[ConstraintName.TERRAIN],
			cost_weights={CostName.FORCES: 1e-3, CostName.EE_MOTION: 1e-2},
		)
