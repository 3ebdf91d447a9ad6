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
Systems Module

The mass-spring-damper model, its symbolic form, and the validation layer
shared with the integrator.
"""

from .oscillator import (
    ModalParameters,
    OscillatorModel,
    OscillatorParameters,
    Parameterization,
    PhysicalParameters,
)
from .symbolic import SymbolicDynamics, build_symbolic_dynamics
from .validation import (
    IntegrationSetupError,
    InvalidParameterError,
    InvalidStepSizeError,
    InvalidTimeWindowError,
    MSDError,
    StateNotInitializedError,
    StepLimitExceededError,
    TimeWindowNotSetError,
    UnavailableParameterError,
    ValidationError,
)

__all__ = [
    "ModalParameters",
    "OscillatorModel",
    "OscillatorParameters",
    "Parameterization",
    "PhysicalParameters",
    "SymbolicDynamics",
    "build_symbolic_dynamics",
    "IntegrationSetupError",
    "InvalidParameterError",
    "InvalidStepSizeError",
    "InvalidTimeWindowError",
    "MSDError",
    "StateNotInitializedError",
    "StepLimitExceededError",
    "TimeWindowNotSetError",
    "UnavailableParameterError",
    "ValidationError",
]
