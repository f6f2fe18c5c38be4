from abc import ABC, abstractmethod

import numpy as np


class VariableSet(ABC):
	"""
	Block of optimization variables with a unique name.
	The values of a block are a flat vector, each value has a lower and upper bound.
	"""
	name: str

	def __init__(self, n_vars: int, name: str):
		self.name = name
		self._n_vars = n_vars

	def get_rows(self) -> int:
		return self._n_vars

	@abstractmethod
	def get_values(self) -> np.ndarray:
		pass

	@abstractmethod
	def set_values(self, x: np.ndarray):
		pass

	def get_bounds(self) -> tuple[np.ndarray, np.ndarray]:
		"""
		:return: lower bounds, upper bounds (unbounded by default)
		"""
		return -np.full(self.get_rows(), np.inf), np.full(self.get_rows(), np.inf)

	def _check_values_size(self, x):
		x = np.asarray(x, dtype=float).reshape(-1)
		if x.shape[0] != self.get_rows():
			raise ValueError(f"variable set '{self.name}' has {self.get_rows()} values, got {x.shape[0]}")
		return x
