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
Unit Tests for OscillatorModel
==============================

Tests cover:
1. Physical parameterization (m, c, k) and derived wn, zeta
2. Modal parameterization (zeta, wn)
3. Parameter range validation
4. Configuration accessor (derived and physical)
5. Derivative functions and vectorized evaluation
6. Immutability, equality and representation
"""

import warnings

import numpy as np
import pytest

from msdsim.systems.oscillator import (
    ModalParameters,
    OscillatorModel,
    Parameterization,
    PhysicalParameters,
)
from msdsim.systems.validation import (
    InvalidParameterError,
    UnavailableParameterError,
)

# ============================================================================
# Test Class 1: Physical Parameterization
# ============================================================================


class TestPhysicalParameterization:
    """Test construction from m, c, k"""

    def test_unit_parameters(self):
        """m=c=k=1 gives wn=1, zeta=1"""
        model = OscillatorModel.from_physical(m=1.0, c=1.0, k=1.0)

        assert model.wn == 1.0
        assert model.zeta == 1.0
        assert model.parameterization is Parameterization.PHYSICAL
        assert model.is_physical

    @pytest.mark.parametrize(
        "m,c,k",
        [
            (1.0, 1.0, 1.0),
            (2.0, 0.5, 8.0),
            (0.3, 0.01, 12.5),
            (10.0, 3.0, 0.2),
            (1e-2, 1e-3, 1e3),
        ],
    )
    def test_derived_formulas(self, m, c, k):
        """wn = sqrt(k/m) and zeta = c/m"""
        model = OscillatorModel.from_physical(m, c, k)

        assert np.isclose(model.wn, np.sqrt(k / m), rtol=1e-6)
        assert np.isclose(model.zeta, c / m, rtol=1e-6)

    def test_values_are_single_precision(self):
        """All stored values are float32"""
        model = OscillatorModel.from_physical(2.0, 0.5, 8.0)

        for value in (model.m, model.c, model.k, model.wn, model.zeta):
            assert isinstance(value, np.float32)

    def test_constructor_with_tagged_parameters(self):
        """Direct construction from PhysicalParameters"""
        model = OscillatorModel(PhysicalParameters(m=4.0, c=2.0, k=16.0))

        assert model.wn == 2.0
        assert model.zeta == 0.5

    @pytest.mark.parametrize(
        "m,c,k",
        [
            (0.0, 1.0, 1.0),
            (-1.0, 1.0, 1.0),
            (1.0, 0.0, 1.0),
            (1.0, -0.5, 1.0),
            (1.0, 1.0, 0.0),
            (1.0, 1.0, -2.0),
            (np.nan, 1.0, 1.0),
            (1.0, np.inf, 1.0),
        ],
    )
    def test_invalid_parameters(self, m, c, k):
        """Any of m, c, k not strictly positive is rejected"""
        with pytest.raises(InvalidParameterError):
            OscillatorModel.from_physical(m, c, k)

    def test_error_names_parameter(self):
        """Error message names the offending parameter"""
        with pytest.raises(InvalidParameterError, match="k must be strictly positive"):
            OscillatorModel.from_physical(1.0, 1.0, -3.0)

    def test_invalid_parameter_is_value_error(self):
        """InvalidParameterError can be caught as ValueError"""
        with pytest.raises(ValueError):
            OscillatorModel.from_physical(-1.0, 1.0, 1.0)

    def test_non_numeric_parameter(self):
        """Non-numeric input is rejected as an invalid parameter"""
        with pytest.raises(InvalidParameterError, match="real number"):
            OscillatorModel.from_physical("heavy", 1.0, 1.0)


# ============================================================================
# Test Class 2: Modal Parameterization
# ============================================================================


class TestModalParameterization:
    """Test construction from zeta, wn"""

    def test_stores_values_directly(self):
        model = OscillatorModel.from_modal(zeta=0.3, wn=5.0)

        assert np.isclose(model.zeta, 0.3)
        assert model.wn == 5.0
        assert model.parameterization is Parameterization.MODAL
        assert not model.is_physical

    def test_undamped_allowed(self):
        """zeta=0 is a valid (undamped) model"""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            model = OscillatorModel.from_modal(zeta=0.0, wn=1.0)

        assert model.zeta == 0.0

    def test_zero_frequency_warns(self):
        """wn=0 is accepted with a warning"""
        with pytest.warns(UserWarning, match="no restoring force"):
            model = OscillatorModel.from_modal(zeta=0.5, wn=0.0)

        assert model.wn == 0.0

    def test_zero_frequency_warning_points_at_caller(self):
        with pytest.warns(UserWarning, match="no restoring force") as record:
            OscillatorModel.from_modal(zeta=0.5, wn=0.0)

        assert record[0].filename.endswith("oscillator_test.py")

    def test_constructor_with_tagged_parameters(self):
        model = OscillatorModel(ModalParameters(zeta=0.1, wn=2.0))

        assert model.wn == 2.0

    @pytest.mark.parametrize(
        "zeta,wn",
        [
            (-0.1, 1.0),
            (0.1, -1.0),
            (-1.0, -1.0),
            (np.nan, 1.0),
            (0.1, np.inf),
        ],
    )
    def test_invalid_parameters(self, zeta, wn):
        """Negative or non-finite zeta/wn is rejected"""
        with pytest.raises(InvalidParameterError):
            OscillatorModel.from_modal(zeta, wn)

    def test_physical_values_unavailable(self):
        """m, c, k cannot be read from a modal model"""
        model = OscillatorModel.from_modal(0.2, 3.0)

        for name in ("m", "c", "k"):
            with pytest.raises(UnavailableParameterError, match=f"'{name}'"):
                getattr(model, name)

    def test_unknown_parameter_type(self):
        with pytest.raises(TypeError, match="PhysicalParameters or ModalParameters"):
            OscillatorModel((1.0, 1.0, 1.0))


# ============================================================================
# Test Class 3: Configuration Accessor
# ============================================================================


class TestGetConfig:
    """Test get_config for both parameterizations"""

    def test_derived_config_after_physical(self):
        """Round trip: physical construction -> (wn, zeta)"""
        m, c, k = 2.0, 1.0, 18.0
        model = OscillatorModel.from_physical(m, c, k)

        wn, zeta = model.get_config(derived=True)

        assert np.isclose(wn, np.sqrt(k / m))
        assert np.isclose(zeta, c / m)

    def test_default_is_derived(self):
        model = OscillatorModel.from_physical(4.0, 2.0, 16.0)

        assert model.get_config() == model.get_config(derived=True)

    def test_physical_config(self):
        model = OscillatorModel.from_physical(4.0, 2.0, 16.0)

        assert model.get_config(derived=False) == (4.0, 2.0, 16.0)

    def test_derived_config_after_modal(self):
        model = OscillatorModel.from_modal(zeta=0.25, wn=4.0)

        assert model.get_config(derived=True) == (4.0, 0.25)

    def test_physical_config_after_modal_fails(self):
        model = OscillatorModel.from_modal(zeta=0.25, wn=4.0)

        with pytest.raises(UnavailableParameterError):
            model.get_config(derived=False)

    def test_unavailable_is_lookup_error(self):
        model = OscillatorModel.from_modal(zeta=0.25, wn=4.0)

        with pytest.raises(LookupError):
            model.get_config(derived=False)


# ============================================================================
# Test Class 4: Dynamics
# ============================================================================


class TestDynamics:
    """Test the two first-order derivative functions"""

    def test_derivative_position_is_velocity(self):
        model = OscillatorModel.from_physical(1.0, 1.0, 1.0)

        assert model.derivative_position(3.0, -1.5) == -1.5
        assert model.derivative_position(0.0, 0.0) == 0.0

    @pytest.mark.parametrize(
        "x,x_dot,expected",
        [
            (1.0, 0.0, -4.0),
            (0.0, 1.0, -0.5),
            (1.0, 2.0, -5.0),
            (-2.0, -2.0, 9.0),
        ],
    )
    def test_derivative_velocity(self, x, x_dot, expected):
        """dx_dot/dt = -wn²*x - zeta*x_dot with wn=2, zeta=0.5"""
        model = OscillatorModel.from_modal(zeta=0.5, wn=2.0)

        assert np.isclose(model.derivative_velocity(x, x_dot), expected)

    def test_same_dynamics_from_both_parameterizations(self):
        """Physical and modal models with equal wn, zeta agree"""
        physical = OscillatorModel.from_physical(m=2.0, c=1.0, k=8.0)
        modal = OscillatorModel.from_modal(zeta=0.5, wn=2.0)

        for x, x_dot in [(1.0, 0.0), (0.3, -0.7), (-5.0, 2.0)]:
            assert np.isclose(
                physical.derivative_velocity(x, x_dot),
                modal.derivative_velocity(x, x_dot),
            )

    def test_call_returns_state_derivative(self):
        model = OscillatorModel.from_modal(zeta=0.5, wn=2.0)

        dx = model(np.array([1.0, 2.0], dtype=np.float32))

        assert dx.shape == (2,)
        assert dx.dtype == np.float32
        assert np.allclose(dx, [2.0, -5.0])

    def test_call_rejects_wrong_shape(self):
        model = OscillatorModel.from_modal(zeta=0.5, wn=2.0)

        with pytest.raises(ValueError, match="shape"):
            model(np.zeros(3, dtype=np.float32))

    def test_derivatives_are_single_precision(self):
        model = OscillatorModel.from_physical(1.0, 1.0, 1.0)

        assert isinstance(model.derivative_velocity(0.1, 0.2), np.float32)
        assert isinstance(model.derivative_position(0.1, 0.2), np.float32)


# ============================================================================
# Test Class 5: Immutability and Identity
# ============================================================================


class TestImmutability:
    """Model cannot be modified after construction"""

    def test_cannot_set_attribute(self):
        model = OscillatorModel.from_physical(1.0, 1.0, 1.0)

        with pytest.raises(AttributeError, match="immutable"):
            model.wn = 5.0

    def test_cannot_set_private_attribute(self):
        model = OscillatorModel.from_physical(1.0, 1.0, 1.0)

        with pytest.raises(AttributeError):
            model._zeta = 0.0

    def test_cannot_delete_attribute(self):
        model = OscillatorModel.from_physical(1.0, 1.0, 1.0)

        with pytest.raises(AttributeError):
            del model._wn

    def test_equality(self):
        assert OscillatorModel.from_physical(1, 2, 3) == OscillatorModel.from_physical(1, 2, 3)
        assert OscillatorModel.from_modal(0.1, 2) == OscillatorModel.from_modal(0.1, 2)
        assert OscillatorModel.from_physical(1, 2, 3) != OscillatorModel.from_physical(1, 2, 4)

    def test_different_parameterizations_not_equal(self):
        """Equal dynamics from different parameter sets are distinct models"""
        physical = OscillatorModel.from_physical(m=2.0, c=1.0, k=8.0)
        modal = OscillatorModel.from_modal(zeta=0.5, wn=2.0)

        assert physical != modal

    def test_hashable(self):
        models = {
            OscillatorModel.from_physical(1, 1, 1),
            OscillatorModel.from_physical(1, 1, 1),
        }
        assert len(models) == 1

    def test_repr(self):
        assert "m=" in repr(OscillatorModel.from_physical(1, 1, 1))
        assert "zeta=" in repr(OscillatorModel.from_modal(0.5, 1))
        assert "m=" not in repr(OscillatorModel.from_modal(0.5, 1))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
