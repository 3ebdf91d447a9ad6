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
Integrator Base - Abstract Interface for Fixed-Step Integration

Defines the interface every integrator of the oscillator implements, plus
the shared statistics bookkeeping (steps, derivative evaluations, time).

Result Types
------------
Integrators return the Trajectory TypedDict from msdsim.types.trajectories:
- x, x_dot, t: index-aligned float32 sequences
- success, message, nfev, nsteps, dt, integration_time, solver
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from msdsim.types.core import ScalarLike, StateDerivative, StateVector
from msdsim.types.trajectories import Trajectory

if TYPE_CHECKING:
    from msdsim.integration.integration_state import InitialState, TimeWindow
    from msdsim.systems.oscillator import OscillatorModel


class IntegratorBase(ABC):
    """
    Abstract base class for oscillator integrators.

    All integrators must implement:
    - step(): Single integration step
    - integrate(): Multi-step integration over a time window
    - name: Integrator name for display

    Examples
    --------
    >>> integrator = RK4Integrator(model, dt=0.001)
    >>>
    >>> # Single step
    >>> x_next = integrator.step(np.array([1.0, 0.0], dtype=np.float32))
    >>>
    >>> # Multi-step integration
    >>> trajectory = integrator.integrate(InitialState(2.0, 0.0), TimeWindow(10.0))
    >>> print(f"Steps: {trajectory['nsteps']}, evaluations: {trajectory['nfev']}")
    """

    def __init__(
        self,
        model: "OscillatorModel",
        dt: ScalarLike,
        **options,
    ):
        """
        Initialize integrator.

        Parameters
        ----------
        model : OscillatorModel
            Oscillator to integrate (read-only)
        dt : float
            Fixed step size. Checked when integrating, after the initial
            state and time window checks.
        **options : dict
            Integrator-specific options:
            - max_steps : int or None
                Refuse runs needing more steps than this (default: None,
                unbounded)

        Raises
        ------
        ValueError
            If max_steps is given and is not a positive integer
        """
        self.model = model
        self.dt = dt
        self.options = options

        self.max_steps: Optional[int] = options.get("max_steps")
        if self.max_steps is not None and (
            isinstance(self.max_steps, bool)
            or not isinstance(self.max_steps, int)
            or self.max_steps < 1
        ):
            raise ValueError(f"max_steps must be a positive integer or None, got {self.max_steps!r}")

        # Statistics
        self._stats = {
            "total_steps": 0,
            "total_fev": 0,  # Derivative evaluations
            "total_time": 0.0,
        }

    @abstractmethod
    def step(self, x: StateVector, dt: Optional[ScalarLike] = None) -> StateVector:
        """
        Take one integration step: x(t) -> x(t + dt).

        Parameters
        ----------
        x : StateVector
            Current state [x, x_dot]
        dt : Optional[float]
            Step size (uses self.dt if None)

        Returns
        -------
        StateVector
            Next state, float32
        """
        pass

    @abstractmethod
    def integrate(
        self,
        initial_state: Optional["InitialState"],
        time_window: Optional["TimeWindow"],
        dt: Optional[ScalarLike] = None,
    ) -> Trajectory:
        """
        Integrate over a time window.

        Parameters
        ----------
        initial_state : InitialState or None
            Position and velocity at t_start. None means "not set".
        time_window : TimeWindow or None
            Integration window. None means "not set".
        dt : Optional[float]
            Step size (uses self.dt if None)

        Returns
        -------
        Trajectory
            Position, velocity and time sequences with diagnostics

        Raises
        ------
        StateNotInitializedError
            If initial_state is None
        TimeWindowNotSetError
            If time_window is None
        InvalidStepSizeError
            If dt <= 0
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable integrator name."""
        pass

    # ========================================================================
    # Common Utilities
    # ========================================================================

    def _evaluate_dynamics(self, x: StateVector) -> StateDerivative:
        """Evaluate the model's state derivative, counting evaluations."""
        self._stats["total_fev"] += 1
        return self.model(x)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get integration statistics.

        Returns
        -------
        dict
            Statistics with keys:
            - 'total_steps': Total integration steps taken
            - 'total_fev': Total derivative evaluations
            - 'total_time': Total integration time
            - 'avg_fev_per_step': Average evaluations per step

        Examples
        --------
        >>> trajectory = integrator.integrate(x0, window)
        >>> stats = integrator.get_stats()
        >>> print(f"Evals/step: {stats['avg_fev_per_step']:.1f}")
        """
        avg_fev = self._stats["total_fev"] / max(1, self._stats["total_steps"])

        return {
            **self._stats,
            "avg_fev_per_step": avg_fev,
        }

    def reset_stats(self):
        """Reset integration statistics to zero."""
        self._stats["total_steps"] = 0
        self._stats["total_fev"] = 0
        self._stats["total_time"] = 0.0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(model={self.model!r}, dt={self.dt})"

    def __str__(self) -> str:
        return f"{self.name} (dt={float(self.dt):.4g})"


__all__ = ["IntegratorBase"]
