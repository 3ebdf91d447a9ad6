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
Numerical Integration
=====================

Fixed-step RK4 integration of the mass-spring-damper oscillator, and the
setup objects (initial state, time window) that gate it.

>>> from msdsim.integration import IntegrationState, RK4Integrator
>>>
>>> state = IntegrationState().set_initial_state(2.0, 0.0).set_time_window(10.0)
>>> trajectory = RK4Integrator(model, dt=0.001).integrate_state(state)
"""

from .integration_state import InitialState, IntegrationState, SetupPhase, TimeWindow
from .integrator_base import IntegratorBase
from .rk4_integrator import DEFAULT_STEP_SIZE, RK4Integrator, integrate_oscillator

__all__ = [
    "InitialState",
    "IntegrationState",
    "SetupPhase",
    "TimeWindow",
    "IntegratorBase",
    "DEFAULT_STEP_SIZE",
    "RK4Integrator",
    "integrate_oscillator",
]
