import numpy as np

from gait_nlp.optimization_parameters import OptimizationParameters, ConstraintName, CostName, BaseRepresentation
from gait_nlp.variables.contact_schedule import ContactPhase


quadruped_example_total_duration = 2.0
quadruped_example_num_steps = 4

quadruped_example_end_base_pos = np.array([
    0.4, 0.0, 0.42
])


quadruped_example_params = OptimizationParameters.create_quadruped_trot(
    total_duration=quadruped_example_total_duration,
    num_steps=quadruped_example_num_steps
)
quadruped_example_params.init_swing_height = 0.05
quadruped_example_params.constraints = [ConstraintName.TERRAIN, ConstraintName.TOTAL_TIME]
quadruped_example_params.cost_weights = {
    CostName.FORCES: 1e-4,
    CostName.EE_MOTION: 1e-2,
    CostName.BASE_LIN_VEL: 1e-1,
}


# all feet stand, then all jump together (e.g. to compare both base representations)
quadruped_example_jump_phases = [
    ContactPhase(0.6, True), ContactPhase(0.3, False), ContactPhase(0.6, True)
]
quadruped_example_jump_params = OptimizationParameters(
    ee_phases=[list(quadruped_example_jump_phases) for _ in range(4)],
    base_representation=BaseRepresentation.POLY_COEFF,
    duration_base_polynomial=0.15,
    constraints=[ConstraintName.TERRAIN],
    cost_weights={CostName.FORCES: 1e-4},
)
