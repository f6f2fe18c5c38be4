from abc import ABC

import casadi
import numpy as np
from casadi import nlpsol, Sparsity

from gait_nlp.nlp.nlp import Nlp


class IterationRecorder(casadi.Callback):
	"""
	Solver iteration callback that passes x of every iteration to on_iteration.
	"""

	def __init__(self, name, nx: int, ng: int, on_iteration, opts=None):
		casadi.Callback.__init__(self)
		self.nx = nx
		self.ng = ng
		self.on_iteration = on_iteration
		self.construct(name, opts if opts is not None else {})

	def get_n_in(self):
		return casadi.nlpsol_n_out()

	def get_n_out(self):
		return 1

	def get_name_in(self, i):
		return casadi.nlpsol_out(i)

	def get_name_out(self, i):
		return "ret"

	def get_sparsity_in(self, i):
		n = casadi.nlpsol_out(i)
		if n == 'f':
			return Sparsity.scalar()
		elif n in ('x', 'lam_x'):
			return Sparsity.dense(self.nx)
		elif n in ('g', 'lam_g'):
			return Sparsity.dense(self.ng)
		else:
			return Sparsity(0, 0)

	def eval(self, arg):
		x = arg[casadi.nlpsol_out().index('x')]
		self.on_iteration(np.array(x).reshape(-1))
		return [0]




class SolverAdapter(ABC):
	"""
	Solves an Nlp with a casadi nlpsol plugin, the variable bounds are passed as simple bounds lbx, ubx.
	The solution is written back into the variables of the Nlp, also when the solver did not converge.
	"""
	plugin_name: str

	def __init__(self, solver_opts: dict = None, p_opts: dict = None, record_iterations=True):
		"""
		:param solver_opts: options of the solver plugin (e.g. ipopt options)
		:param p_opts: options of casadi nlpsol
		"""
		self.solver_opts = solver_opts if solver_opts is not None else {}
		self.p_opts = p_opts if p_opts is not None else {}
		self.record_iterations = record_iterations
		self.iteration_recorder = None
		self.solver_stats = None


	def solve(self, nlp: Nlp) -> dict:
		"""
		:return the solver stats (contains e.g. iter_count)
		"""
		problem = nlp.create_casadi_problem()
		lbx, ubx = nlp.variables.get_bounds()
		lbg, ubg = nlp.get_constraint_bounds()
		x0 = nlp.variables.get_values()

		# put the solver options into the options
		opts = dict(self.p_opts)
		opts[self.plugin_name] = dict(self.solver_opts)
		if self.record_iterations:
			# keep a reference, casadi does not own the callback
			self.iteration_recorder = IterationRecorder(
				'iteration_recorder',
				nx=problem['x'].shape[0],
				ng=problem['g'].shape[0],
				on_iteration=nlp.save_iterate
			)
			opts['iteration_callback'] = self.iteration_recorder

		print(f"> solve nlp with {self.plugin_name}: {x0.shape[0]} variables, {lbg.shape[0]} constraints")
		solver = nlpsol('solver', self.plugin_name, problem, opts)
		result = solver(x0=x0, lbx=lbx, ubx=ubx, lbg=lbg, ubg=ubg)

		# copy back results form solver to the variables
		nlp.variables.set_values(np.array(result['x']).reshape(-1))
		if not self.record_iterations:
			nlp.save_current()

		self.solver_stats = solver.stats()
		print(f">> {self.plugin_name} finished: {self.solver_stats.get('return_status')} "
			  f"(success: {self.solver_stats.get('success')}, iterations: {self.solver_stats.get('iter_count')})")
		return self.solver_stats


class IpoptAdapter(SolverAdapter):
	plugin_name = 'ipopt'


class SnoptAdapter(SolverAdapter):
	plugin_name = 'snopt'
