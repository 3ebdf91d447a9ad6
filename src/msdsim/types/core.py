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
Core Types - Scalars, State Vectors and Numeric Precision

Basic building blocks shared by the oscillator model and the integrator.

The oscillator is a two-state system:

    state = [x, x_dot]    (position, velocity)

All numeric values are held in single precision (float32). Inputs may be
given as any real scalar; they are converted on entry with ``as_float``.

Usage
-----
>>> from msdsim.types.core import StateVector, as_float, as_state_vector
>>> x: StateVector = as_state_vector(2.0, 0.0)
>>> x.dtype
dtype('float32')
"""

from typing import Union

import numpy as np

# ============================================================================
# Numeric Precision
# ============================================================================

FLOAT_DTYPE = np.float32
"""
Floating point type used for every stored parameter, state and sample.

Examples
--------
>>> np.zeros(3, dtype=FLOAT_DTYPE).dtype
dtype('float32')
"""

STATE_DIM = 2
"""Number of states of the oscillator: position and velocity."""

# ============================================================================
# Scalar and Vector Types
# ============================================================================

ScalarLike = Union[float, int, np.number]
"""
Real scalar accepted at the public API boundary.

Python float/int or a NumPy scalar. Converted to ``FLOAT_DTYPE`` on entry.

Examples
--------
>>> def scale(value: ScalarLike) -> np.float32:
...     return as_float(value) * 2
"""

StateVector = np.ndarray
"""
State vector [x, x_dot] of shape (2,) and dtype float32.

Examples
--------
>>> x: StateVector = np.array([1.0, 0.0], dtype=np.float32)
>>> x[0]  # position
>>> x[1]  # velocity
"""

StateDerivative = np.ndarray
"""
Time derivative of the state vector, [dx/dt, dx_dot/dt], shape (2,).

Examples
--------
>>> dx: StateDerivative = model(np.array([1.0, 0.0], dtype=np.float32))
"""


def as_float(value: ScalarLike) -> np.float32:
    """Convert a real scalar to ``FLOAT_DTYPE``."""
    return FLOAT_DTYPE(value)


def as_state_vector(position: ScalarLike, velocity: ScalarLike) -> StateVector:
    """
    Pack position and velocity into a float32 state vector.

    Parameters
    ----------
    position : ScalarLike
        Displacement x
    velocity : ScalarLike
        Velocity x_dot

    Returns
    -------
    StateVector
        Array [x, x_dot] of shape (2,)
    """
    return np.array([position, velocity], dtype=FLOAT_DTYPE)


__all__ = [
    "FLOAT_DTYPE",
    "STATE_DIM",
    "ScalarLike",
    "StateVector",
    "StateDerivative",
    "as_float",
    "as_state_vector",
]
