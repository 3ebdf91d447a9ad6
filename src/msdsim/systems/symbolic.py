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
Symbolic State-Space Form of the Oscillator

Builds the SymPy representation of the normalized equation of motion

    f(x, x_dot) = [ x_dot,
                    -omega_n**2*x - zeta*x_dot ]

for inspection and verification of the numeric model. The integrator never
evaluates SymPy expressions; the numeric derivatives live on
OscillatorModel.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List

import numpy as np
import sympy as sp


@dataclass(frozen=True)
class SymbolicDynamics:
    """
    Symbolic right-hand side of the oscillator's first-order system.

    Attributes
    ----------
    state_vars : List[sp.Symbol]
        [x, x_dot]
    parameters : Dict[sp.Symbol, float]
        Numeric values of omega_n and zeta
    f_sym : sp.Matrix
        2x1 matrix of state derivatives
    order : int
        Order of the system as written (1: state-space form)
    """

    state_vars: List[sp.Symbol]
    parameters: Dict[sp.Symbol, float]
    f_sym: sp.Matrix
    order: int = 1

    def substituted(self) -> sp.Matrix:
        """f_sym with parameter values substituted."""
        return self.f_sym.subs(self.parameters)

    def to_function(self) -> Callable[[float, float], np.ndarray]:
        """
        Generate a NumPy function (x, x_dot) -> [dx/dt, dx_dot/dt].

        Accepts scalar arguments and returns a float64 array of shape (2,).

        Examples
        --------
        >>> f = build_symbolic_dynamics(wn=1.0, zeta=0.0).to_function()
        >>> f(1.0, 0.0)
        array([ 0., -1.])
        """
        func = sp.lambdify(self.state_vars, self.substituted(), modules="numpy")

        def wrapped_func(x, x_dot):
            # lambdify returns Matrix output as nested lists [[a], [b]]
            return np.asarray(func(x, x_dot), dtype=float).reshape(-1)

        return wrapped_func


def build_symbolic_dynamics(wn: float, zeta: float) -> SymbolicDynamics:
    """
    Define the oscillator dynamics symbolically.

    Parameters
    ----------
    wn : float
        Natural frequency value
    zeta : float
        Damping ratio value

    Returns
    -------
    SymbolicDynamics
    """
    x, x_dot = sp.symbols("x x_dot", real=True)
    wn_sym = sp.symbols("omega_n", real=True, nonnegative=True)
    zeta_sym = sp.symbols("zeta", real=True, nonnegative=True)

    f_sym = sp.Matrix([[x_dot], [-wn_sym**2 * x - zeta_sym * x_dot]])

    return SymbolicDynamics(
        state_vars=[x, x_dot],
        parameters={wn_sym: wn, zeta_sym: zeta},
        f_sym=f_sym,
    )


__all__ = ["SymbolicDynamics", "build_symbolic_dynamics"]
