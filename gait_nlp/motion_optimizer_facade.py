from enum import Enum

import numpy as np

from gait_nlp import variable_names as names
from gait_nlp.angular_state_converter import AngularStateConverter
from gait_nlp.errors import ConfigurationError
from gait_nlp.models import RobotModel, create_quadruped_model
from gait_nlp.nlp.cost_constraint_factory import BasicCostConstraintFactory
from gait_nlp.nlp.nlp import Nlp
from gait_nlp.nlp.solver_adapters import IpoptAdapter, SnoptAdapter
from gait_nlp.nlp.terms import ConstraintSet, CostTerm
from gait_nlp.optimization_parameters import OptimizationParameters, BaseRepresentation
from gait_nlp.state import BaseState, StateLin3d, RobotStateCartesian
from gait_nlp.terrain import FlatGround
from gait_nlp.trajectory_builder import TrajectoryBuilder
from gait_nlp.variables.coeff_spline import CoeffSpline
from gait_nlp.variables.composite import VariableComposite
from gait_nlp.variables.contact_schedule import ContactSchedule
from gait_nlp.variables.node_values import NodeValues, Dx, X, Y, Z
from gait_nlp.variables.phase_nodes import EndeffectorNodes, ForceNodes


class NlpSolver(Enum):
	IPOPT = 'ipopt'
	SNOPT = 'snopt'


class MotionOptimizerFacade:
	"""
	Builds the variables, constraints and costs of a legged motion problem, solves it
	and samples the solution (or every solver iteration) into robot state trajectories.

	Example usage:
		facade = MotionOptimizerFacade(model, params=params)
		facade.final_base = BaseState(lin=StateLin3d(p=[1.0, 0, 0.42]))
		facade.solve_problem()
		trajectory = facade.get_trajectories(dt=0.02)[-1]
	"""
	model: RobotModel
	params: OptimizationParameters
	initial_base: BaseState
	final_base: BaseState
	initial_ee_W: list[np.ndarray]
	nlp: Nlp
	solver_stats: dict

	def __init__(self,
				 model: RobotModel = None,
				 terrain=None,
				 params: OptimizationParameters = None,
				 factory=None,
				 angular_state_converter=AngularStateConverter.get_state
				 ):
		self.model = model if model is not None else create_quadruped_model()
		self.terrain = terrain if terrain is not None else FlatGround()
		self.params = params if params is not None else OptimizationParameters.create_quadruped_trot()
		self.factory = factory if factory is not None else BasicCostConstraintFactory()
		self.angular_state_converter = angular_state_converter
		assert self.model.get_ee_count() == self.params.get_ee_count(), \
			f"model has {self.model.get_ee_count()} end-effectors but params define phases for {self.params.get_ee_count()}"

		self.nlp = Nlp()
		self.solver_stats = None
		self.build_default_initial_state()
		# stay in place by default
		self.final_base = self.initial_base


	def build_default_initial_state(self):
		"""
		Base above the origin at nominal height, feet on the ground below their nominal position.
		"""
		p_nom_B = self.model.get_nominal_stance_in_base()

		self.initial_base = BaseState(
			lin=StateLin3d(p=[0.0, 0.0, -p_nom_B[0][Z]]),
			ang=StateLin3d(p=[0.0, 0.0, 0.0])  # euler (roll, pitch, yaw)
		)

		self.initial_ee_W = []
		for p_nom in p_nom_B:
			p = p_nom + self.initial_base.lin.p
			p[Z] = self.terrain.get_height(p[X], p[Y])
			self.initial_ee_W.append(p)


	def build_variables(self) -> VariableComposite:
		variables = VariableComposite('variables')

		if self.params.base_representation == BaseRepresentation.CUBIC_HERMITE:
			self.set_base_representation_hermite(variables)
		elif self.params.base_representation == BaseRepresentation.POLY_COEFF:
			self.set_base_representation_coeff(variables)
		else:
			raise ConfigurationError(f"base representation {self.params.base_representation} does not exist")

		p_nom_B = self.model.get_nominal_stance_in_base()
		for ee in self.model.get_ee_ids():
			contact_schedule = ContactSchedule(
				ee,
				self.params.ee_phases[ee],
				self.params.min_phase_duration,
				self.params.max_phase_duration
			)
			variables.add_component(contact_schedule, is_variable=self.params.optimize_phase_timings())
			contact_sequence = contact_schedule.get_contact_sequence()

			final_ee_W = self.final_base.lin.p + p_nom_B[ee]
			final_ee_W[Z] = self.terrain.get_height(final_ee_W[X], final_ee_W[Y])
			ee_motion = EndeffectorNodes(
				3,
				contact_sequence,
				names.get_ee_motion_id(ee),
				self.params.motion_polynomials_per_swing_phase
			)
			ee_motion.initialize_variables(self.initial_ee_W[ee], final_ee_W, contact_schedule.get_time_per_phase())
			ee_motion.add_swing_height(self.params.init_swing_height)
			ee_motion.add_start_bound(Dx.POS, (X, Y), self.initial_ee_W[ee])
			contact_schedule.add_observer(ee_motion)
			variables.add_component(ee_motion)

			ee_force = ForceNodes(
				3,
				contact_sequence,
				names.get_ee_force_id(ee),
				self.params.force_polynomials_per_stance_phase,
				self.model.force_limit
			)
			f_stand = np.array([0.0, 0.0, self.model.get_standing_z_force()])
			ee_force.initialize_variables(f_stand, f_stand, contact_schedule.get_time_per_phase())
			contact_schedule.add_observer(ee_force)
			variables.add_component(ee_force)

		return variables


	def set_base_representation_coeff(self, variables: VariableComposite):
		"""
		Base as independent polynomials with free coefficients, continuity is up to the constraints.
		"""
		durations = self.params.get_base_poly_durations()
		for spline_id, initial, final in [
			(names.base_linear, self.initial_base.lin, self.final_base.lin),
			(names.base_angular, self.initial_base.ang, self.final_base.ang)
		]:
			coeff_spline = CoeffSpline(spline_id, durations, self.params.order_coeff_polys)
			for poly_vars in coeff_spline.get_poly_vars():
				variables.add_component(poly_vars)
			coeff_spline.initialize_variables(initial.p, final.p)
			# just for evaluation, the coefficients are already variables
			variables.add_component(coeff_spline, is_variable=False)

	def set_base_representation_hermite(self, variables: VariableComposite):
		"""
		Base as cubic hermite spline. Start position and velocity and final velocity are fixed,
		final position only in x,y (linear) and yaw (angular), the rest is left to the constraints.
		"""
		durations = self.params.get_base_poly_durations()
		n_polys = len(durations)

		spline_lin = NodeValues(3, n_polys, names.base_linear)
		spline_lin.initialize_variables(self.initial_base.lin.p, self.final_base.lin.p, durations)
		spline_lin.add_start_bound(Dx.POS, (X, Y, Z), self.initial_base.lin.p)
		spline_lin.add_start_bound(Dx.VEL, (X, Y, Z), self.initial_base.lin.v)
		spline_lin.add_final_bound(Dx.POS, (X, Y), self.final_base.lin.p)
		spline_lin.add_final_bound(Dx.VEL, (X, Y, Z), self.final_base.lin.v)
		variables.add_component(spline_lin)

		spline_ang = NodeValues(3, n_polys, names.base_angular)
		spline_ang.initialize_variables(self.initial_base.ang.p, self.final_base.ang.p, durations)
		spline_ang.add_start_bound(Dx.POS, (X, Y, Z), self.initial_base.ang.p)
		spline_ang.add_start_bound(Dx.VEL, (X, Y, Z), self.initial_base.ang.v)
		spline_ang.add_final_bound(Dx.POS, (Z,), self.final_base.ang.p)
		spline_ang.add_final_bound(Dx.VEL, (X, Y, Z), self.final_base.ang.v)
		variables.add_component(spline_ang)


	def build_cost_constraints(self, variables: VariableComposite) -> tuple[list[ConstraintSet], list[CostTerm]]:
		self.factory.init(
			variables,
			self.params,
			self.terrain,
			self.model,
			self.initial_ee_W,
			self.initial_base,
			self.final_base
		)

		constraints = []
		for name in self.params.get_used_constraints():
			constraints += self.factory.get_constraint(name)

		costs = []
		for name, weight in self.params.get_cost_weights().items():
			costs += self.factory.get_cost(name, weight)

		return constraints, costs


	def build_problem(self):
		self.nlp.clear()
		variables = self.build_variables()
		self.nlp.set_variables(variables)
		constraints, costs = self.build_cost_constraints(variables)
		for c in constraints:
			self.nlp.add_constraint_set(c)
		for c in costs:
			self.nlp.add_cost_set(c)

	def solve_problem(self, solver: NlpSolver = NlpSolver.IPOPT, solver_opts: dict = None, p_opts: dict = None) -> dict:
		"""
		Build and solve the problem, the solution stays in self.nlp.variables.
		:return the solver stats
		"""
		if solver == NlpSolver.IPOPT:
			adapter = IpoptAdapter(solver_opts, p_opts)
		elif solver == NlpSolver.SNOPT:
			adapter = SnoptAdapter(solver_opts, p_opts)
		else:
			raise ConfigurationError(f"solver {solver} does not exist")

		self.build_problem()
		print(f"## solve {self.model.name} motion ({self.params.base_representation.value} base)")
		self.solver_stats = adapter.solve(self.nlp)
		if not self.solver_stats.get('success', False):
			print(f"> solver did not converge ({self.solver_stats.get('return_status')}), trajectory may violate constraints")
		return self.solver_stats


	def get_trajectories(self, dt: float) -> list[list[RobotStateCartesian]]:
		"""
		One trajectory per recorded solver iteration.
		"""
		final_values = self.nlp.variables.get_values()
		trajectories = []
		for iteration in range(self.nlp.get_iteration_count()):
			variables = self.nlp.get_opt_variables(iteration)
			trajectories.append(self.build_trajectory(variables, dt))
		self.nlp.variables.set_values(final_values)
		return trajectories

	def get_trajectory(self, dt: float) -> list[RobotStateCartesian]:
		"""
		Trajectory of the current variable values (the solution after solve_problem).
		"""
		return self.build_trajectory(self.nlp.variables, dt)

	def build_trajectory(self, variables: VariableComposite, dt: float) -> list[RobotStateCartesian]:
		return TrajectoryBuilder(self.model.get_ee_count(), self.angular_state_converter).build(variables, dt)
