from abc import abstractmethod

import numpy as np

from gait_nlp.variables.node_values import NodeValues, NodeValueInfo, Dx


class PhaseNodes(NodeValues):
	"""
	Hermite spline of one end-effector whose polynomials follow the phases of its contact schedule.

	In a phase where the value is constant (e.g. foot position in contact) the phase has one polynomial,
	in a phase where it changes the phase is split into n_polys_in_changing_phase polynomials of equal duration.
	Registered as observer of the contact schedule, a change of the phase durations just re-times the polynomials.
	"""

	def __init__(self,
				 n_dim: int,
				 contact_sequence: list[bool],
				 name: str,
				 n_polys_in_changing_phase: int
				 ):
		assert n_polys_in_changing_phase >= 1
		self.contact_sequence = list(contact_sequence)
		self.n_polys_in_changing_phase = n_polys_in_changing_phase

		# phase of each polynomial
		self.poly_phase = []
		self.poly_is_constant = []
		for phase, in_contact in enumerate(self.contact_sequence):
			constant = self.is_constant_phase(in_contact)
			n_polys = 1 if constant else n_polys_in_changing_phase
			self.poly_phase += [phase] * n_polys
			self.poly_is_constant += [constant] * n_polys

		super().__init__(n_dim, len(self.poly_phase), name)


	@abstractmethod
	def is_constant_phase(self, in_contact: bool) -> bool:
		pass

	@abstractmethod
	def _is_fixed_node_value(self, node_id: int, deriv: Dx) -> bool:
		pass

	def _shares_position_with_previous_node(self, node_id: int) -> bool:
		return False


	def _node_touches_constant_poly(self, node_id: int) -> bool:
		before = node_id - 1 >= 0 and self.poly_is_constant[node_id - 1]
		after = node_id < len(self.poly_is_constant) and self.poly_is_constant[node_id]
		return before or after

	def _build_index_map(self):
		index_map = []
		fixed = []
		prev_pos_indices = None
		for node_id in range(len(self.poly_phase) + 1):
			pos_indices = []
			for deriv in Dx:
				if self._is_fixed_node_value(node_id, deriv):
					fixed += [NodeValueInfo(node_id, deriv, dim) for dim in range(self.n_dim)]
					continue
				for dim in range(self.n_dim):
					info = NodeValueInfo(node_id, deriv, dim)
					if deriv == Dx.POS and self._shares_position_with_previous_node(node_id):
						idx = prev_pos_indices[dim]
						index_map[idx].append(info)
					else:
						idx = len(index_map)
						index_map.append([info])
					if deriv == Dx.POS:
						pos_indices.append(idx)
			prev_pos_indices = pos_indices
		return index_map, fixed


	def get_poly_durations_from_phases(self, phase_durations) -> np.ndarray:
		assert len(phase_durations) == len(self.contact_sequence), \
			f"'{self.name}' has {len(self.contact_sequence)} phases, got {len(phase_durations)} durations"
		durations = []
		for phase, duration in enumerate(phase_durations):
			n_polys = self.poly_phase.count(phase)
			durations += [duration / n_polys] * n_polys
		return np.array(durations)

	def update_phase_durations(self, phase_durations):
		"""
		Called by the observed contact schedule when its phase durations changed.
		"""
		self.set_poly_durations(self.get_poly_durations_from_phases(phase_durations))


	def initialize_variables(self, initial_val, final_val, phase_durations):
		"""
		Set node positions on the straight line from initial_val to final_val (by node time),
		velocities are zero. Fixed node values are zero.
		"""
		self.update_phase_durations(phase_durations)
		initial_val = np.asarray(initial_val, dtype=float)
		final_val = np.asarray(final_val, dtype=float)
		t_total = self.get_total_time()
		for node_id, t in enumerate(self.get_node_times()):
			self.nodes[node_id, Dx.POS] = initial_val + (final_val - initial_val) * (t / t_total)
			self.nodes[node_id, Dx.VEL] = 0.0
		for info in self.get_fixed_node_values():
			self.nodes[info.node_id, info.deriv, info.dim] = 0.0
		# nodes that share a variable get the value of the first of them
		self.set_values(self.get_values())

	def get_phase_of_poly(self, poly_id: int) -> int:
		return self.poly_phase[poly_id]




class EndeffectorNodes(PhaseNodes):
	"""
	Foot position, constant during contact, moving during flight.
	"""

	def __init__(self, n_dim: int, contact_sequence: list[bool], name: str, n_polys_in_changing_phase: int = 1):
		super().__init__(n_dim, contact_sequence, name, n_polys_in_changing_phase)

	def is_constant_phase(self, in_contact: bool) -> bool:
		return in_contact

	def _is_fixed_node_value(self, node_id: int, deriv: Dx) -> bool:
		# foot does not move at start and end of a contact phase
		return deriv == Dx.VEL and self._node_touches_constant_poly(node_id)

	def _shares_position_with_previous_node(self, node_id: int) -> bool:
		return node_id > 0 and self.poly_is_constant[node_id - 1]

	def get_swing_node_ids(self) -> list[int]:
		"""
		Inner nodes of flight phases, the foot can move freely there.
		"""
		return [node_id for node_id in range(1, self.get_node_count() - 1) if not self._node_touches_constant_poly(node_id)]

	def add_swing_height(self, height: float):
		"""
		Raise the (last, vertical) position dimension of all nodes inside a flight phase by height.
		"""
		for node_id in self.get_swing_node_ids():
			self.nodes[node_id, Dx.POS, self.n_dim - 1] += height




class ForceNodes(PhaseNodes):
	"""
	Foot force, zero during flight, shaped by n_polys_in_changing_phase polynomials during contact.
	The force (not its derivative) is bounded by force_limit, the normal (last) dimension can only push.
	"""
	force_limit: float

	def __init__(self, n_dim: int, contact_sequence: list[bool], name: str, n_polys_in_changing_phase: int, force_limit: float):
		self.force_limit = force_limit
		super().__init__(n_dim, contact_sequence, name, n_polys_in_changing_phase)
		for idx, infos in enumerate(self.get_index_map()):
			info = infos[0]
			if info.deriv != Dx.POS:
				continue
			if info.dim == self.n_dim - 1:
				self._set_bounds(idx, 0.0, force_limit)
			else:
				self._set_bounds(idx, -force_limit, force_limit)

	def is_constant_phase(self, in_contact: bool) -> bool:
		return not in_contact

	def _is_fixed_node_value(self, node_id: int, deriv: Dx) -> bool:
		# no force in the air
		return self._node_touches_constant_poly(node_id)
