import rich

from gait_nlp.models import create_quadruped_model
from gait_nlp.motion_optimizer_facade import MotionOptimizerFacade, NlpSolver
from gait_nlp.plotting import plot_robot_trajectory
from gait_nlp.serialization.yaml_util import serialize_variables, serialize_trajectory, save_yaml
from gait_nlp.state import BaseState, StateLin3d

from examples.quadruped_params import *


facade = MotionOptimizerFacade(
    model=create_quadruped_model(),
    params=quadruped_example_params
)
facade.final_base = BaseState(
    lin=StateLin3d(p=quadruped_example_end_base_pos),
    ang=StateLin3d(p=[0.0, 0.0, 0.0])
)

stats = facade.solve_problem(
    NlpSolver.IPOPT,
    solver_opts=dict(max_iter=200, print_level=5),
)
facade.nlp.print_current()

trajectories = facade.get_trajectories(dt=0.02)
rich.print(f'{len(trajectories)} iterations, final trajectory with {len(trajectories[-1])} states')

# store solution
save_yaml(dict(
    params=facade.params.to_dict(),
    solution=serialize_variables(facade.nlp.variables),
    trajectory=serialize_trajectory(trajectories[-1])
), 'out/quadruped_walk.yaml')

plot_robot_trajectory(trajectories[-1], title='quadruped trot')
