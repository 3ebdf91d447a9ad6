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
Mass-Spring-Damper Oscillator Model

Single-degree-of-freedom mass-spring-damper system:

    m*x'' + c*x' + k*x = 0

written in the normalized form used throughout the package:

    x'' + zeta*x' + wn²*x = 0

and split into two coupled first-order equations (state-space form), which
is what makes the RK4 integrator applicable:

    dx/dt     = x_dot
    dx_dot/dt = -wn²*x - zeta*x_dot

Two equivalent parameterizations are supported:
- Physical: m, c, k (all strictly positive). wn = sqrt(k/m), zeta = c/m.
- Modal: zeta, wn (both non-negative). m, c, k are not available.

Note that zeta = c/m in the physical parameterization is the coefficient of
x' in the normalized equation, not the textbook c/(2*sqrt(k*m)).

Examples
--------
>>> model = OscillatorModel.from_physical(m=1.0, c=1.0, k=1.0)
>>> model.get_config(derived=True)
(1.0, 1.0)
>>>
>>> modal = OscillatorModel.from_modal(zeta=0.0, wn=1.0)
>>> modal.derivative_velocity(1.0, 0.0)
-1.0
>>> modal.get_config(derived=False)
Traceback (most recent call last):
    ...
UnavailableParameterError: ...
"""

import warnings
from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

import numpy as np

from msdsim.systems.symbolic import SymbolicDynamics, build_symbolic_dynamics
from msdsim.systems.validation import (
    UnavailableParameterError,
    validate_non_negative,
    validate_positive,
)
from msdsim.types.core import (
    FLOAT_DTYPE,
    STATE_DIM,
    ScalarLike,
    StateDerivative,
    StateVector,
    as_float,
)

# ============================================================================
# Parameterizations
# ============================================================================


class Parameterization(Enum):
    """
    Which parameter set an OscillatorModel was built from.

    Attributes
    ----------
    PHYSICAL : str
        Mass, damping coefficient and spring stiffness (m, c, k)
    MODAL : str
        Damping ratio and natural frequency (zeta, wn)
    """

    PHYSICAL = "physical"
    MODAL = "modal"


@dataclass(frozen=True)
class PhysicalParameters:
    """Mass m, damping coefficient c and spring stiffness k."""

    m: ScalarLike
    c: ScalarLike
    k: ScalarLike


@dataclass(frozen=True)
class ModalParameters:
    """Damping ratio zeta and natural frequency wn."""

    zeta: ScalarLike
    wn: ScalarLike


OscillatorParameters = Union[PhysicalParameters, ModalParameters]


# ============================================================================
# Oscillator Model
# ============================================================================


class OscillatorModel:
    """
    Immutable mass-spring-damper model with precomputed wn² and zeta.

    Parameters
    ----------
    parameters : PhysicalParameters or ModalParameters
        Parameter set to build the model from. Prefer the ``from_physical``
        and ``from_modal`` constructors.

    Raises
    ------
    InvalidParameterError
        If any parameter is out of range
    TypeError
        If parameters is neither PhysicalParameters nor ModalParameters

    Examples
    --------
    >>> model = OscillatorModel(PhysicalParameters(m=2.0, c=0.5, k=8.0))
    >>> model.wn, model.zeta
    (2.0, 0.25)
    >>> dx = model(np.array([1.0, 0.0], dtype=np.float32))
    >>> dx
    array([ 0., -4.], dtype=float32)
    """

    def __init__(self, parameters: OscillatorParameters):
        if isinstance(parameters, PhysicalParameters):
            m = validate_positive("m", parameters.m)
            c = validate_positive("c", parameters.c)
            k = validate_positive("k", parameters.k)

            self._set("_parameterization", Parameterization.PHYSICAL)
            self._set("_physical", (m, c, k))
            self._set("_wn", as_float(np.sqrt(k / m)))
            self._set("_zeta", as_float(c / m))

        elif isinstance(parameters, ModalParameters):
            zeta = validate_non_negative("zeta", parameters.zeta)
            wn = validate_non_negative("wn", parameters.wn)

            self._set("_parameterization", Parameterization.MODAL)
            self._set("_physical", None)
            self._set("_wn", wn)
            self._set("_zeta", zeta)

        else:
            raise TypeError(
                "parameters must be PhysicalParameters or ModalParameters, "
                f"got {type(parameters).__name__}"
            )

        # Used on every derivative evaluation
        self._set("_wn_squared", as_float(self._wn * self._wn))

    @classmethod
    def from_physical(cls, m: ScalarLike, c: ScalarLike, k: ScalarLike) -> "OscillatorModel":
        """
        Build from mass, damping coefficient and spring stiffness.

        Parameters
        ----------
        m : ScalarLike
            Mass (> 0)
        c : ScalarLike
            Damping coefficient (> 0)
        k : ScalarLike
            Spring stiffness (> 0)

        Raises
        ------
        InvalidParameterError
            If m <= 0, c <= 0 or k <= 0
        """
        return cls(PhysicalParameters(m=m, c=c, k=k))

    @classmethod
    def from_modal(cls, zeta: ScalarLike, wn: ScalarLike) -> "OscillatorModel":
        """
        Build from damping ratio and natural frequency.

        Parameters
        ----------
        zeta : ScalarLike
            Damping ratio (>= 0). zeta=0 gives an undamped oscillator.
        wn : ScalarLike
            Natural frequency in rad/s (>= 0)

        Raises
        ------
        InvalidParameterError
            If zeta < 0 or wn < 0

        Warns
        -----
        UserWarning
            If wn == 0 (no restoring force)
        """
        model = cls(ModalParameters(zeta=zeta, wn=wn))
        if model.wn == 0:
            warnings.warn(
                "Natural frequency wn=0: the model has no restoring force "
                "and describes a free (damped) mass.",
                UserWarning,
                stacklevel=2,
            )
        return model

    # ========================================================================
    # Immutability
    # ========================================================================

    def _set(self, name: str, value) -> None:
        object.__setattr__(self, name, value)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable; cannot set '{name}'")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable; cannot delete '{name}'")

    # ========================================================================
    # Parameters
    # ========================================================================

    @property
    def parameterization(self) -> Parameterization:
        return self._parameterization

    @property
    def is_physical(self) -> bool:
        """True if m, c and k are available."""
        return self._parameterization is Parameterization.PHYSICAL

    @property
    def wn(self) -> np.float32:
        """Natural frequency sqrt(k/m) [rad/s]."""
        return self._wn

    @property
    def zeta(self) -> np.float32:
        """Damping ratio (c/m in the physical parameterization)."""
        return self._zeta

    @property
    def m(self) -> np.float32:
        return self._physical_value(0, "m")

    @property
    def c(self) -> np.float32:
        return self._physical_value(1, "c")

    @property
    def k(self) -> np.float32:
        return self._physical_value(2, "k")

    def _physical_value(self, index: int, name: str) -> np.float32:
        if self._physical is None:
            raise UnavailableParameterError(
                f"'{name}' is not available: model was built from modal parameters "
                "(zeta, wn), which do not determine m, c and k."
            )
        return self._physical[index]

    def get_config(self, derived: bool = True) -> Tuple[np.float32, ...]:
        """
        Return the model configuration.

        Parameters
        ----------
        derived : bool
            If True, return the derived/modal pair (wn, zeta).
            If False, return the physical triple (m, c, k).

        Returns
        -------
        tuple
            (wn, zeta) or (m, c, k)

        Raises
        ------
        UnavailableParameterError
            If derived=False on a model built from modal parameters

        Examples
        --------
        >>> OscillatorModel.from_physical(4.0, 2.0, 16.0).get_config()
        (2.0, 0.5)
        >>> OscillatorModel.from_physical(4.0, 2.0, 16.0).get_config(derived=False)
        (4.0, 2.0, 16.0)
        """
        if derived:
            return (self._wn, self._zeta)

        if self._physical is None:
            raise UnavailableParameterError(
                "Physical configuration (m, c, k) is not available: model was "
                "built from modal parameters (zeta, wn)."
            )
        return self._physical

    # ========================================================================
    # Dynamics
    # ========================================================================

    def derivative_position(self, x: ScalarLike, x_dot: ScalarLike) -> np.float32:
        """Rate of change of position: dx/dt = x_dot."""
        return as_float(x_dot)

    def derivative_velocity(self, x: ScalarLike, x_dot: ScalarLike) -> np.float32:
        """Rate of change of velocity: dx_dot/dt = -wn²*x - zeta*x_dot."""
        return as_float(-self._wn_squared * as_float(x) - self._zeta * as_float(x_dot))

    def __call__(self, state: StateVector) -> StateDerivative:
        """
        Evaluate both derivatives on a state vector [x, x_dot].

        Parameters
        ----------
        state : StateVector
            Array of shape (2,)

        Returns
        -------
        StateDerivative
            Array [dx/dt, dx_dot/dt] of shape (2,), float32
        """
        if np.shape(state) != (STATE_DIM,):
            raise ValueError(
                f"state must have shape ({STATE_DIM},), got {np.shape(state)}"
            )
        x, x_dot = state[0], state[1]
        return np.array(
            [self.derivative_position(x, x_dot), self.derivative_velocity(x, x_dot)],
            dtype=FLOAT_DTYPE,
        )

    def symbolic_dynamics(self) -> SymbolicDynamics:
        """
        SymPy state-space form of this model's equation of motion.

        Returns
        -------
        SymbolicDynamics
            Symbols, parameter values and the 2x1 right-hand side matrix

        Examples
        --------
        >>> sym = OscillatorModel.from_modal(0.5, 2.0).symbolic_dynamics()
        >>> sym.f_sym[1]
        -omega_n**2*x - zeta*x_dot
        """
        return build_symbolic_dynamics(wn=float(self._wn), zeta=float(self._zeta))

    # ========================================================================
    # Comparison / Display
    # ========================================================================

    def _key(self):
        if self._physical is not None:
            return (self._parameterization, tuple(float(v) for v in self._physical))
        return (self._parameterization, (float(self._zeta), float(self._wn)))

    def __eq__(self, other) -> bool:
        if not isinstance(other, OscillatorModel):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        if self._physical is not None:
            m, c, k = self._physical
            return f"OscillatorModel(m={m}, c={c}, k={k}, wn={self._wn}, zeta={self._zeta})"
        return f"OscillatorModel(zeta={self._zeta}, wn={self._wn})"


__all__ = [
    "Parameterization",
    "PhysicalParameters",
    "ModalParameters",
    "OscillatorParameters",
    "OscillatorModel",
]
