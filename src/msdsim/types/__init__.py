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
Types Module - Type Definitions for msdsim

Central import point for the type aliases and result types used by the
oscillator model and the integrator.

Module Organization
------------------
- core: numeric precision, scalars, state vectors
- trajectories: time spans, sample sequences, Trajectory result
"""

from .core import (
    FLOAT_DTYPE,
    STATE_DIM,
    ScalarLike,
    StateDerivative,
    StateVector,
    as_float,
    as_state_vector,
)
from .trajectories import (
    PositionSequence,
    TimePoints,
    TimeSpan,
    Trajectory,
    VelocitySequence,
)

__all__ = [
    # Core
    "FLOAT_DTYPE",
    "STATE_DIM",
    "ScalarLike",
    "StateDerivative",
    "StateVector",
    "as_float",
    "as_state_vector",
    # Trajectories
    "PositionSequence",
    "TimePoints",
    "TimeSpan",
    "Trajectory",
    "VelocitySequence",
]
