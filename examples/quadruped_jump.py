import rich

from gait_nlp.models import create_quadruped_model
from gait_nlp.motion_optimizer_facade import MotionOptimizerFacade, NlpSolver
from gait_nlp.plotting import plot_robot_trajectory
from gait_nlp.state import BaseState, StateLin3d

from examples.quadruped_params import *


# all four feet leave the ground together, base as free polynomial coefficients
facade = MotionOptimizerFacade(
    model=create_quadruped_model(),
    params=quadruped_example_jump_params
)
facade.final_base = BaseState(lin=StateLin3d(p=[0.2, 0.0, 0.42]))

stats = facade.solve_problem(NlpSolver.IPOPT, solver_opts=dict(max_iter=100))
rich.print(stats['return_status'])

plot_robot_trajectory(facade.get_trajectory(dt=0.02), title='quadruped jump')
