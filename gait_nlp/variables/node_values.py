from dataclasses import dataclass
from enum import Enum, IntEnum

import numpy as np

from gait_nlp.spline.polynomial3 import Polynomial3
from gait_nlp.spline.spline import Spline
from gait_nlp.util import get_interval_start_times
from gait_nlp.variables.variable_set import VariableSet


class Dx(IntEnum):
	"""
	Kind of value stored in a node.
	"""
	POS = 0
	VEL = 1


class NodeSelector(Enum):
	FIRST = 'first'
	LAST = 'last'


# axis ids
X = 0
Y = 1
Z = 2


@dataclass(frozen=True)
class BoundaryConstraint:
	node_selector: NodeSelector
	value_kind: Dx
	dimensions: tuple[int, ...]
	value: np.ndarray


@dataclass(frozen=True)
class NodeValueInfo:
	"""
	One scalar of the node array: nodes[node_id, deriv, dim].
	"""
	node_id: int
	deriv: Dx
	dim: int


class NodeValues(VariableSet, Spline):
	"""
	Spline of cubic hermite polynomials defined by nodes (position and velocity) between the polynomials.
	Position and velocity are continuous by construction.

	The optimization variables are mapped to the node values, one variable may be used by multiple nodes
	(e.g. a foot position that stays constant during contact) and node values without a variable are fixed.
	By default every node value is an own variable.
	"""
	n_dim: int
	nodes: np.ndarray	# shape (n_nodes, 2, n_dim), second index is Dx

	def __init__(self, n_dim: int, n_polys: int, name: str):
		assert n_polys > 0
		self.n_dim = n_dim
		self.nodes = np.zeros((n_polys + 1, len(Dx), n_dim))
		self.poly_durations = np.ones(n_polys)
		self.boundary_constraints: list[BoundaryConstraint] = []

		self._index_map, self._fixed_values = self._build_index_map()
		VariableSet.__init__(self, len(self._index_map), name)
		self._lower_bounds = -np.full(self.get_rows(), np.inf)
		self._upper_bounds = np.full(self.get_rows(), np.inf)


	def _build_index_map(self) -> tuple[list[list[NodeValueInfo]], list[NodeValueInfo]]:
		"""
		:return: for each optimization variable the node values it sets, node values that are not optimized
		"""
		index_map = []
		for node_id in range(self.get_node_count()):
			for deriv in Dx:
				for dim in range(self.n_dim):
					index_map.append([NodeValueInfo(node_id, deriv, dim)])
		return index_map, []


	def get_node_count(self) -> int:
		return self.nodes.shape[0]

	def get_poly_durations(self) -> np.ndarray:
		return self.poly_durations

	def get_node_times(self) -> np.ndarray:
		return get_interval_start_times(self.poly_durations)

	def get_polynomial(self, poly_id: int) -> Polynomial3:
		return Polynomial3(
			x0=self.nodes[poly_id, Dx.POS],
			dx0=self.nodes[poly_id, Dx.VEL],
			x1=self.nodes[poly_id + 1, Dx.POS],
			dx1=self.nodes[poly_id + 1, Dx.VEL],
			deltaT=self.poly_durations[poly_id]
		)

	def get_index_map(self) -> list[list[NodeValueInfo]]:
		return self._index_map

	def get_fixed_node_values(self) -> list[NodeValueInfo]:
		return self._fixed_values

	def get_variable_indices(self, node_id: int, deriv: Dx, dim: int) -> list[int]:
		"""
		Indices of the optimization variables that set the given node value (empty when fixed).
		"""
		info = NodeValueInfo(node_id, Dx(deriv), dim)
		return [i for i, infos in enumerate(self._index_map) if info in infos]


	def set_poly_durations(self, durations):
		durations = np.asarray(durations, dtype=float)
		assert durations.shape[0] == self.get_poly_count(), \
			f"'{self.name}' has {self.get_poly_count()} polynomials, got {durations.shape[0]} durations"
		assert np.all(durations > 0), f"polynomial durations need to be positive: {durations}"
		self.poly_durations = durations.copy()


	def initialize_variables(self, initial_pos, final_pos, durations):
		"""
		Set node positions on the straight line from initial_pos to final_pos
		and node velocities to the average velocity of that line.
		"""
		self.set_poly_durations(durations)
		initial_pos = np.asarray(initial_pos, dtype=float)
		final_pos = np.asarray(final_pos, dtype=float)
		t_total = self.get_total_time()
		average_velocity = (final_pos - initial_pos) / t_total
		for node_id, t in enumerate(self.get_node_times()):
			self.nodes[node_id, Dx.POS] = initial_pos + (final_pos - initial_pos) * (t / t_total)
			self.nodes[node_id, Dx.VEL] = average_velocity


	def get_values(self) -> np.ndarray:
		x = np.zeros(self.get_rows())
		for idx, infos in enumerate(self._index_map):
			# all node values of one variable are equal, so just use the first one
			info = infos[0]
			x[idx] = self.nodes[info.node_id, info.deriv, info.dim]
		return x

	def set_values(self, x: np.ndarray):
		x = self._check_values_size(x)
		for idx, infos in enumerate(self._index_map):
			for info in infos:
				self.nodes[info.node_id, info.deriv, info.dim] = x[idx]

	def get_bounds(self) -> tuple[np.ndarray, np.ndarray]:
		return self._lower_bounds.copy(), self._upper_bounds.copy()


	def add_start_bound(self, deriv: Dx, dimensions, value):
		self.add_bound(NodeSelector.FIRST, deriv, dimensions, value)

	def add_final_bound(self, deriv: Dx, dimensions, value):
		self.add_bound(NodeSelector.LAST, deriv, dimensions, value)

	def add_bound(self, node_selector: NodeSelector, deriv: Dx, dimensions, value):
		"""
		Fix the given dimensions of the first/last node position or velocity to value.
		Dimensions that are not listed stay free. Node values that are not optimized stay untouched.
		"""
		deriv = Dx(deriv)
		dimensions = tuple(dimensions)
		value = np.asarray(value, dtype=float)
		for existing in self.boundary_constraints:
			if existing.node_selector == node_selector and existing.value_kind == deriv:
				overlap = set(existing.dimensions) & set(dimensions)
				if overlap:
					raise ValueError(f"'{self.name}': {node_selector.value} node {deriv.name} is already bounded for dimensions {sorted(overlap)}")
		self.boundary_constraints.append(BoundaryConstraint(node_selector, deriv, dimensions, value))

		node_id = 0 if node_selector == NodeSelector.FIRST else self.get_node_count() - 1
		for dim in dimensions:
			for idx in self.get_variable_indices(node_id, deriv, dim):
				self._lower_bounds[idx] = value[dim]
				self._upper_bounds[idx] = value[dim]
				for info in self._index_map[idx]:
					self.nodes[info.node_id, info.deriv, info.dim] = value[dim]

	def _set_bounds(self, idx: int, lower: float, upper: float):
		self._lower_bounds[idx] = lower
		self._upper_bounds[idx] = upper
