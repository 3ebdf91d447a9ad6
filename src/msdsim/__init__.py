# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
msdsim - Mass-Spring-Damper Simulation
======================================

Single-degree-of-freedom mass-spring-damper model integrated with a
fixed-step 4th-order Runge-Kutta method.

Quick start
-----------
>>> from msdsim import IntegrationState, OscillatorModel, integrate_oscillator
>>>
>>> model = OscillatorModel.from_physical(m=1.0, c=1.0, k=1.0)
>>> state = IntegrationState().set_initial_state(2.0, 0.0).set_time_window(10.0)
>>> trajectory = integrate_oscillator(model, state, step_size=0.001)
>>> trajectory["t"], trajectory["x"], trajectory["x_dot"]
"""

from msdsim.integration import (
    DEFAULT_STEP_SIZE,
    InitialState,
    IntegrationState,
    IntegratorBase,
    RK4Integrator,
    SetupPhase,
    TimeWindow,
    integrate_oscillator,
)
from msdsim.systems import (
    IntegrationSetupError,
    InvalidParameterError,
    InvalidStepSizeError,
    InvalidTimeWindowError,
    ModalParameters,
    MSDError,
    OscillatorModel,
    Parameterization,
    PhysicalParameters,
    StateNotInitializedError,
    StepLimitExceededError,
    SymbolicDynamics,
    TimeWindowNotSetError,
    UnavailableParameterError,
    ValidationError,
)
from msdsim.types import Trajectory

__version__ = "0.1.0"

__all__ = [
    # Model
    "OscillatorModel",
    "PhysicalParameters",
    "ModalParameters",
    "Parameterization",
    "SymbolicDynamics",
    # Integration
    "DEFAULT_STEP_SIZE",
    "InitialState",
    "IntegrationState",
    "IntegratorBase",
    "RK4Integrator",
    "SetupPhase",
    "TimeWindow",
    "Trajectory",
    "integrate_oscillator",
    # Errors
    "MSDError",
    "ValidationError",
    "InvalidParameterError",
    "InvalidTimeWindowError",
    "InvalidStepSizeError",
    "IntegrationSetupError",
    "StateNotInitializedError",
    "TimeWindowNotSetError",
    "StepLimitExceededError",
    "UnavailableParameterError",
]
