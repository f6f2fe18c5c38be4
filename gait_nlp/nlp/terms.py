from abc import ABC, abstractmethod

import casadi
import numpy as np


class ConstraintSet(ABC):
	"""
	Constraints lb <= g(x) <= ub on the flat optimization vector x of a VariableComposite.
	"""
	name: str

	def __init__(self, name: str):
		self.name = name

	@abstractmethod
	def get_expression(self, x: casadi.MX) -> casadi.MX:
		"""
		:param x: symbol of the whole flat optimization vector
		:return: column vector g(x)
		"""
		pass

	@abstractmethod
	def get_bounds(self) -> tuple[np.ndarray, np.ndarray]:
		pass

	def get_rows(self) -> int:
		return self.get_bounds()[0].shape[0]


class CostTerm(ABC):
	"""
	Weighted scalar cost on the flat optimization vector x.
	"""
	name: str
	weight: float

	def __init__(self, name: str, weight: float = 1.0):
		self.name = name
		self.weight = weight

	@abstractmethod
	def get_unweighted_expression(self, x: casadi.MX) -> casadi.MX:
		pass

	def get_expression(self, x: casadi.MX) -> casadi.MX:
		return self.weight * self.get_unweighted_expression(x)
