import casadi
import numpy as np
import rich

from gait_nlp.nlp.terms import ConstraintSet, CostTerm
from gait_nlp.variables.composite import VariableComposite


class Nlp:
	"""
	Nonlinear program made of a variable composite, constraint sets and costs.
	Keeps the values of x of every solver iteration (when the solver reports them).
	"""
	variables: VariableComposite
	constraints: list[ConstraintSet]
	costs: list[CostTerm]
	x_iterations: list[np.ndarray]

	def __init__(self):
		self.variables = VariableComposite('variables')
		self.constraints = []
		self.costs = []
		self.x_iterations = []

	def set_variables(self, variables: VariableComposite):
		self.variables = variables
		self.x_iterations = []

	def add_constraint_set(self, constraint: ConstraintSet):
		self.constraints.append(constraint)

	def add_cost_set(self, cost: CostTerm):
		self.costs.append(cost)

	def clear(self):
		self.variables = VariableComposite('variables')
		self.constraints = []
		self.costs = []
		self.x_iterations = []


	def get_constraint_bounds(self) -> tuple[np.ndarray, np.ndarray]:
		if len(self.constraints) == 0:
			return np.zeros(0), np.zeros(0)
		bounds = [c.get_bounds() for c in self.constraints]
		return np.concatenate([b[0] for b in bounds]), np.concatenate([b[1] for b in bounds])

	def create_casadi_problem(self) -> dict:
		"""
		Problem dict for casadi.nlpsol with the symbols x, f and g.
		"""
		x = casadi.MX.sym('x', self.variables.get_rows())
		f = casadi.MX(0)
		for cost in self.costs:
			f += cost.get_expression(x)
		if len(self.constraints) > 0:
			g = casadi.vertcat(*[c.get_expression(x) for c in self.constraints])
		else:
			g = casadi.MX(0, 1)
		return {'x': x, 'f': f, 'g': g}


	def save_iterate(self, x):
		self.x_iterations.append(np.array(x, dtype=float).reshape(-1))

	def save_current(self):
		self.save_iterate(self.variables.get_values())

	def get_iteration_count(self) -> int:
		return len(self.x_iterations)

	def get_opt_variables(self, iteration: int) -> VariableComposite:
		"""
		Set the variables to the values of the given iteration.
		"""
		self.variables.set_values(self.x_iterations[iteration])
		return self.variables


	def print_current(self):
		lbx, ubx = self.variables.get_bounds()
		x = self.variables.get_values()
		violated = np.count_nonzero((x < lbx - 1e-6) | (x > ubx + 1e-6))
		print(f"> nlp with {self.variables.get_rows()} variables, "
			  f"{sum(c.get_rows() for c in self.constraints)} constraints, {len(self.costs)} costs")
		print(f">> {violated} variables outside of their bounds, {self.get_iteration_count()} iterations recorded")
		self.variables.print()
		rich.print('constraints', [f"{c.name} ({c.get_rows()})" for c in self.constraints])
		rich.print('costs', [f"{c.name} (w={c.weight})" for c in self.costs])
