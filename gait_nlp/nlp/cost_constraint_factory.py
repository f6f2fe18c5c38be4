import casadi
import numpy as np

from gait_nlp import variable_names as names
from gait_nlp.errors import ConfigurationError
from gait_nlp.nlp.terms import ConstraintSet, CostTerm
from gait_nlp.optimization_parameters import OptimizationParameters, ConstraintName, CostName
from gait_nlp.variables.composite import VariableComposite
from gait_nlp.variables.contact_schedule import ContactSchedule
from gait_nlp.variables.node_values import NodeValues, Dx, X, Y, Z


class TotalDurationConstraint(ConstraintSet):
	"""
	Phase durations of one end-effector sum up to the total time.
	"""

	def __init__(self, variables: VariableComposite, total_time: float, ee: int):
		super().__init__('total_duration_' + str(ee))
		self.schedule_range = variables.get_index_range(names.get_ee_schedule_id(ee))
		self.total_time = total_time

	def get_expression(self, x: casadi.MX) -> casadi.MX:
		return casadi.sum1(x[self.schedule_range])

	def get_bounds(self):
		return np.array([self.total_time]), np.array([self.total_time])


class TerrainConstraint(ConstraintSet):
	"""
	Foot height of the motion nodes: on the ground while in contact, above it in the air.
	"""

	def __init__(self, variables: VariableComposite, terrain, ee: int):
		motion_id = names.get_ee_motion_id(ee)
		super().__init__('terrain_' + str(ee))
		motion = variables.get_component(motion_id, NodeValues)
		offset = variables.get_index_range(motion_id).start

		self.indices = []
		lower, upper = [], []
		for idx, infos in enumerate(motion.get_index_map()):
			info = infos[0]
			if info.deriv != Dx.POS or info.dim != Z:
				continue
			node_pos = motion.nodes[info.node_id, Dx.POS]
			height = terrain.get_height(node_pos[X], node_pos[Y])
			self.indices.append(offset + idx)
			lower.append(height)
			# a position shared by multiple nodes is a foot in contact
			upper.append(height if len(infos) > 1 else np.inf)
		self.lower = np.array(lower)
		self.upper = np.array(upper)

	def get_expression(self, x: casadi.MX) -> casadi.MX:
		return casadi.vertcat(*[x[i] for i in self.indices])

	def get_bounds(self):
		return self.lower.copy(), self.upper.copy()


class NodeCost(CostTerm):
	"""
	Sum of the squared node values (of one derivative and dimension) of a node spline.
	"""

	def __init__(self, variables: VariableComposite, node_id: str, deriv: Dx, dim: int, weight: float):
		super().__init__(f'node_cost_{node_id}_{deriv.name}_{dim}', weight)
		nodes = variables.get_component(node_id, NodeValues)
		offset = variables.get_index_range(node_id).start
		self.indices = [
			offset + idx for idx, infos in enumerate(nodes.get_index_map())
			if infos[0].deriv == deriv and infos[0].dim == dim
		]

	def get_unweighted_expression(self, x: casadi.MX) -> casadi.MX:
		cost = casadi.MX(0)
		for i in self.indices:
			cost += x[i]**2
		return cost




class BasicCostConstraintFactory:
	"""
	Creates the constraints and costs named in the optimization parameters.
	Only a subset of the constraints is provided, requesting another one is a configuration error.
	"""

	def init(self,
			 variables: VariableComposite,
			 params: OptimizationParameters,
			 terrain,
			 model,
			 initial_ee_W: list[np.ndarray],
			 initial_base,
			 final_base
			 ):
		self.variables = variables
		self.params = params
		self.terrain = terrain
		self.model = model
		self.initial_ee_W = initial_ee_W
		self.initial_base = initial_base
		self.final_base = final_base

	def get_constraint(self, name: ConstraintName) -> list[ConstraintSet]:
		ee_ids = range(self.params.get_ee_count())
		if name == ConstraintName.TOTAL_TIME:
			return [TotalDurationConstraint(self.variables, self.params.get_total_time(), ee) for ee in ee_ids]
		elif name == ConstraintName.TERRAIN:
			return [TerrainConstraint(self.variables, self.terrain, ee) for ee in ee_ids]
		raise ConfigurationError(f"constraint {name} is not provided by {type(self).__name__}")

	def get_cost(self, name: CostName, weight: float) -> list[CostTerm]:
		ee_ids = range(self.params.get_ee_count())
		if name == CostName.FORCES:
			return [NodeCost(self.variables, names.get_ee_force_id(ee), Dx.POS, Z, weight) for ee in ee_ids]
		elif name == CostName.EE_MOTION:
			return [NodeCost(self.variables, names.get_ee_motion_id(ee), Dx.VEL, dim, weight) for ee in ee_ids for dim in (X, Y)]
		elif name == CostName.BASE_LIN_VEL:
			return [NodeCost(self.variables, names.base_linear, Dx.VEL, dim, weight) for dim in (X, Y, Z)]
		raise ConfigurationError(f"cost {name} is not provided by {type(self).__name__}")
