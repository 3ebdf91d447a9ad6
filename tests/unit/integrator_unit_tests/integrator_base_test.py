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
Unit Tests for IntegratorBase
=============================

Tests the abstract base class for oscillator integrators:
1. Abstract interface enforcement
2. Initialization and option validation
3. Statistics tracking through _evaluate_dynamics
4. String representations
"""

import numpy as np
import pytest

from msdsim.integration.integrator_base import IntegratorBase
from msdsim.systems.oscillator import OscillatorModel
from msdsim.types.trajectories import Trajectory

# ============================================================================
# Concrete Test Integrator
# ============================================================================


class ConcreteTestIntegrator(IntegratorBase):
    """
    Minimal concrete integrator (explicit Euler) for testing the base class.

    Note: Named 'ConcreteTestIntegrator' instead of 'TestIntegrator'
    to avoid pytest collection warning.
    """

    def step(self, x, dt=None):
        dt = dt or self.dt
        f = self._evaluate_dynamics(x)
        self._stats["total_steps"] += 1
        return (x + dt * f).astype(np.float32)

    def integrate(self, initial_state, time_window, dt=None):
        x = initial_state.as_vector()
        t0, tf = time_window.as_span()
        n = int((tf - t0) / self.dt)
        xs = [x]
        for _ in range(n):
            x = self.step(x)
            xs.append(x)
        states = np.array(xs)

        result: Trajectory = {
            "x": states[:, 0],
            "x_dot": states[:, 1],
            "t": t0 + self.dt * np.arange(n + 1, dtype=np.float32),
            "success": True,
            "nsteps": n,
            "nfev": self._stats["total_fev"],
            "solver": self.name,
        }
        return result

    @property
    def name(self):
        return "ConcreteTestIntegrator"


@pytest.fixture
def model():
    return OscillatorModel.from_modal(zeta=0.0, wn=1.0)


# ============================================================================
# Tests
# ============================================================================


class TestAbstractInterface:
    """IntegratorBase cannot be used directly"""

    def test_cannot_instantiate(self, model):
        with pytest.raises(TypeError):
            IntegratorBase(model, dt=0.01)

    def test_missing_name_is_abstract(self, model):
        class NoName(IntegratorBase):
            def step(self, x, dt=None):
                return x

            def integrate(self, initial_state, time_window, dt=None):
                return {}

        with pytest.raises(TypeError):
            NoName(model, dt=0.01)


class TestInitialization:
    """Constructor stores model, dt and options"""

    def test_attributes(self, model):
        integrator = ConcreteTestIntegrator(model, dt=0.01)

        assert integrator.model is model
        assert integrator.dt == 0.01
        assert integrator.max_steps is None
        assert integrator.options == {}

    def test_max_steps_option(self, model):
        integrator = ConcreteTestIntegrator(model, dt=0.01, max_steps=100)

        assert integrator.max_steps == 100
        assert integrator.options == {"max_steps": 100}

    def test_invalid_max_steps(self, model):
        with pytest.raises(ValueError, match="max_steps"):
            ConcreteTestIntegrator(model, dt=0.01, max_steps=0)


class TestStatistics:
    """Statistics are tracked by _evaluate_dynamics and step"""

    def test_initial_stats(self, model):
        stats = ConcreteTestIntegrator(model, dt=0.01).get_stats()

        assert stats["total_steps"] == 0
        assert stats["total_fev"] == 0
        assert stats["total_time"] == 0.0
        assert stats["avg_fev_per_step"] == 0.0

    def test_evaluate_dynamics_counts(self, model):
        integrator = ConcreteTestIntegrator(model, dt=0.01)

        dx = integrator._evaluate_dynamics(np.array([1.0, 0.0], dtype=np.float32))

        assert np.allclose(dx, [0.0, -1.0])
        assert integrator.get_stats()["total_fev"] == 1

    def test_step_counts(self, model):
        integrator = ConcreteTestIntegrator(model, dt=0.1)
        x = np.array([1.0, 0.0], dtype=np.float32)

        for _ in range(3):
            x = integrator.step(x)

        stats = integrator.get_stats()
        assert stats["total_steps"] == 3
        assert stats["avg_fev_per_step"] == 1.0

    def test_reset(self, model):
        integrator = ConcreteTestIntegrator(model, dt=0.1)
        integrator.step(np.array([1.0, 0.0], dtype=np.float32))

        integrator.reset_stats()

        assert integrator.get_stats()["total_steps"] == 0
        assert integrator.get_stats()["total_fev"] == 0


class TestStringRepresentations:

    def test_repr(self, model):
        text = repr(ConcreteTestIntegrator(model, dt=0.01))

        assert "ConcreteTestIntegrator" in text
        assert "dt=0.01" in text

    def test_str(self, model):
        assert str(ConcreteTestIntegrator(model, dt=0.01)) == "ConcreteTestIntegrator (dt=0.01)"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
