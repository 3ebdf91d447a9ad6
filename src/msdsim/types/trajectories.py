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
Trajectory and Time Types

Defines the time series produced by integrating the oscillator:
- Time spans and time points
- Position and velocity sequences
- The Trajectory result TypedDict

Shape Conventions:
- Every sequence is one-dimensional with n_samples entries
- Sample i of x, x_dot and t refer to the same instant

Usage
-----
>>> from msdsim.types.trajectories import Trajectory, TimeSpan
>>>
>>> trajectory: Trajectory = integrator.integrate(x0, window)
>>> for t, x in zip(trajectory["t"], trajectory["x"]):
...     print(f"t={t:.3f}, x={x:.4f}")
"""

from typing import Tuple

import numpy as np
from typing_extensions import TypedDict

# ============================================================================
# Time Types
# ============================================================================

TimePoints = np.ndarray
"""
Sampled time instants, shape (n_samples,), float32.

Uniformly spaced by the integrator step size, starting at t_start.

Examples
--------
>>> t: TimePoints = trajectory["t"]
>>> dt = t[1] - t[0]
"""

TimeSpan = Tuple[float, float]
"""
Time interval (t_start, t_end) with 0 <= t_start <= t_end.

Examples
--------
>>> t_span: TimeSpan = (0.0, 10.0)
>>> t_span: TimeSpan = window.as_span()
"""

PositionSequence = np.ndarray
"""Position samples x(t_i), shape (n_samples,), float32."""

VelocitySequence = np.ndarray
"""Velocity samples x_dot(t_i), shape (n_samples,), float32."""

# ============================================================================
# Result Types
# ============================================================================


class Trajectory(TypedDict, total=False):
    """
    Result of a fixed-step integration of the oscillator.

    The three sequences are index-aligned, have equal length and are
    read-only (``writeable`` flag cleared).

    Attributes
    ----------
    x : PositionSequence
        Position samples (n_samples,)
    x_dot : VelocitySequence
        Velocity samples (n_samples,)
    t : TimePoints
        Time samples (n_samples,)
    success : bool
        Whether integration completed
    message : str
        Status message
    nfev : int
        Number of state-derivative evaluations in this run
    nsteps : int
        Number of RK4 steps taken (n_samples - 1)
    dt : float
        Step size used
    integration_time : float
        Wall-clock computation time in seconds
    solver : str
        Name of integrator used

    Examples
    --------
    >>> trajectory: Trajectory = integrator.integrate(x0, window)
    >>> trajectory["x"][0], trajectory["x_dot"][0], trajectory["t"][0]
    (2.0, 0.0, 0.0)
    >>> len(trajectory["x"]) == trajectory["nsteps"] + 1
    True
    """

    x: PositionSequence
    x_dot: VelocitySequence
    t: TimePoints
    success: bool
    message: str
    nfev: int
    nsteps: int
    dt: float
    integration_time: float
    solver: str


__all__ = [
    "TimePoints",
    "TimeSpan",
    "PositionSequence",
    "VelocitySequence",
    "Trajectory",
]
