from dataclasses import dataclass
from enum import Enum

import numpy as np

from gait_nlp.util import find_active_interval
from gait_nlp.variable_names import get_ee_schedule_id
from gait_nlp.variables.variable_set import VariableSet


class PhaseType(Enum):
	CONTACT = 'contact'
	FLIGHT = 'flight'


@dataclass
class ContactPhase:
	duration: float
	in_contact: bool

	def __post_init__(self):
		assert self.duration > 0, f"phase duration needs to be positive, got {self.duration}"

	def get_phase_type(self) -> PhaseType:
		return PhaseType.CONTACT if self.in_contact else PhaseType.FLIGHT


class ContactSchedule(VariableSet):
	"""
	Ordered contact and flight phases of one end-effector.
	As optimization variables each phase duration is one value within [min_phase_duration, max_phase_duration].
	The number of phases never changes after construction, only their durations.

	Observers (e.g. the splines of the same end-effector) are notified after every change of the durations
	via observer.update_phase_durations(durations).
	"""
	ee: int

	def __init__(self,
				 ee: int,
				 phases: list[ContactPhase],
				 min_phase_duration: float,
				 max_phase_duration: float
				 ):
		assert len(phases) > 0, "contact schedule needs at least one phase"
		assert min_phase_duration <= max_phase_duration
		super().__init__(len(phases), get_ee_schedule_id(ee))
		self.ee = ee
		self._durations = np.array([p.duration for p in phases], dtype=float)
		self._contact_sequence = [bool(p.in_contact) for p in phases]
		self.min_phase_duration = min_phase_duration
		self.max_phase_duration = max_phase_duration
		self._observers = []


	def add_observer(self, observer):
		self._observers.append(observer)

	def _notify_observers(self):
		for o in self._observers:
			o.update_phase_durations(self.get_time_per_phase())


	def get_total_time(self) -> float:
		return float(sum(self.get_time_per_phase()))

	def get_time_per_phase(self) -> list[float]:
		return [float(d) for d in self._durations]

	def get_contact_sequence(self) -> list[bool]:
		return list(self._contact_sequence)

	def get_phases(self) -> list[ContactPhase]:
		return [ContactPhase(d, c) for d, c in zip(self.get_time_per_phase(), self._contact_sequence)]

	def get_phase_count(self) -> int:
		return len(self._contact_sequence)


	def is_in_contact(self, t: float) -> bool:
		"""
		Contact flag of the phase active at time t (clamped to [0, total time]).
		At the border of two phases the later phase is active.
		"""
		phase, _ = find_active_interval(self._durations, t)
		return self._contact_sequence[phase]


	def get_values(self) -> np.ndarray:
		return self._durations.copy()

	def set_values(self, x: np.ndarray):
		x = self._check_values_size(x)
		assert np.all(x > 0), f"phase durations of '{self.name}' need to be positive: {x}"
		self._durations = x.copy()
		self._notify_observers()

	def get_bounds(self) -> tuple[np.ndarray, np.ndarray]:
		return (
			np.full(self.get_rows(), self.min_phase_duration, dtype=float),
			np.full(self.get_rows(), self.max_phase_duration, dtype=float)
		)
