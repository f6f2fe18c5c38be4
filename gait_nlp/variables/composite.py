import numpy as np
import rich
from rich.table import Table

from gait_nlp.errors import ComponentLookupError
from gait_nlp.variables.variable_set import VariableSet


class VariableComposite:
	"""
	Named, ordered collection of the variable blocks of one optimization problem.

	Blocks added with is_variable=True contribute to the flat optimization vector (in insertion order),
	other blocks are just stored for lookup and evaluation (e.g. a spline assembled from other blocks).
	"""

	def __init__(self, name: str = "variables"):
		self.name = name
		self._components = {}
		self._is_variable = {}


	def add_component(self, component, is_variable: bool = True):
		name = component.name
		if name in self._components:
			raise ValueError(f"component with id '{name}' already exists in '{self.name}'")
		if is_variable:
			assert isinstance(component, VariableSet), f"component '{name}' is not a VariableSet"
		self._components[name] = component
		self._is_variable[name] = is_variable

	def get_component(self, name: str, component_type: type = None):
		"""
		Get component by id.
		:param component_type: when given, the component has to be an instance of it
		:raises ComponentLookupError: id does not exist or the component has a different type
		"""
		if name not in self._components:
			raise ComponentLookupError(f"no component with id '{name}' in '{self.name}'")
		component = self._components[name]
		if component_type is not None and not isinstance(component, component_type):
			raise ComponentLookupError(
				f"component '{name}' is a {type(component).__name__}, not a {component_type.__name__}")
		return component

	def has_component(self, name: str) -> bool:
		return name in self._components

	def get_component_names(self) -> list[str]:
		return list(self._components.keys())

	def get_variable_components(self) -> list[VariableSet]:
		return [c for name, c in self._components.items() if self._is_variable[name]]

	def clear_components(self):
		self._components.clear()
		self._is_variable.clear()


	def get_rows(self) -> int:
		return sum(c.get_rows() for c in self.get_variable_components())

	def get_index_range(self, name: str) -> slice:
		"""
		Slice of the variable block with this id in the flat optimization vector.
		"""
		start = 0
		for c in self.get_variable_components():
			if c.name == name:
				return np.s_[start : start + c.get_rows()]
			start += c.get_rows()
		raise ComponentLookupError(f"no variable component with id '{name}' in '{self.name}'")

	def get_values(self) -> np.ndarray:
		components = self.get_variable_components()
		if len(components) == 0:
			return np.zeros(0)
		return np.concatenate([c.get_values() for c in components])

	def set_values(self, x: np.ndarray):
		x = np.asarray(x, dtype=float).reshape(-1)
		if x.shape[0] != self.get_rows():
			raise ValueError(f"'{self.name}' has {self.get_rows()} variables, got {x.shape[0]} values")
		start = 0
		for c in self.get_variable_components():
			c.set_values(x[start : start + c.get_rows()])
			start += c.get_rows()

	def get_bounds(self) -> tuple[np.ndarray, np.ndarray]:
		components = self.get_variable_components()
		if len(components) == 0:
			return np.zeros(0), np.zeros(0)
		bounds = [c.get_bounds() for c in components]
		return np.concatenate([b[0] for b in bounds]), np.concatenate([b[1] for b in bounds])


	def print(self):
		table = Table(title=f"{self.name} ({self.get_rows()} variables)")
		table.add_column("id")
		table.add_column("type")
		table.add_column("variables", justify="right")
		table.add_column("index range")
		start = 0
		for name, c in self._components.items():
			if self._is_variable[name]:
				table.add_row(name, type(c).__name__, str(c.get_rows()), f"{start} : {start + c.get_rows()}")
				start += c.get_rows()
			else:
				table.add_row(name, type(c).__name__, "-", "not optimized")
		rich.print(table)
