"""Unit tests for binding definitions."""

import pytest

from cockpitbind.router.bindings import Binding, BindingKind, KeyRole, nearest_index


class TestNearestIndex:
    """Tests for value snapping."""

    @pytest.mark.parametrize(
        "value,expected",
        [(0, 1), (0.5, 2), (1, 3), (0.9, 3), (0.1, 1), (-5, 1), (7, 3)],
    )
    def test_snaps_to_closest(self, value, expected):
        """Test snapping onto a three-state list."""
        assert nearest_index([0, 0.5, 1], value) == expected

    def test_tie_prefers_lower_index(self):
        """Test that a halfway value resolves to the first entry scanned."""
        assert nearest_index([0, 0.5, 1], 0.75) == 2
        assert nearest_index([0, 1], 0.5) == 1

    def test_empty_list(self):
        """Test that an empty list yields index 1."""
        assert nearest_index([], 0.3) == 1

    def test_none_value_treated_as_zero(self):
        """Test that a missing value snaps as 0."""
        assert nearest_index([1, 0, 0.5], None) == 2

    def test_descending_list(self):
        """Test snapping on a list that is not ascending."""
        assert nearest_index([1, 0.5, 0], 0.4) == 2


class TestBinding:
    """Tests for the Binding dataclass."""

    @pytest.mark.parametrize(
        "kwargs,kind",
        [
            ({"direct_key": 1}, BindingKind.DIRECT),
            ({"cycle_key": 1}, BindingKind.CYCLE),
            ({"direct_key": 1, "cycle_key": 2}, BindingKind.CYCLE),
            ({"increment_key": 1}, BindingKind.STEPPED),
            ({"decrement_key": 1}, BindingKind.STEPPED),
            ({"toggle_key": 1, "strategy": object()}, BindingKind.CALLBACK_TOGGLE),
            ({}, BindingKind.MIRROR_ONLY),
        ],
    )
    def test_kind(self, kwargs, kind):
        """Test classification by carried roles."""
        assert Binding(actuator=10, **kwargs).kind == kind

    def test_role_keys(self):
        """Test listing the input keys with their roles."""
        binding = Binding(actuator=10, direct_key=1, increment_key=3)
        assert binding.role_keys() == [(KeyRole.DIRECT, 1), (KeyRole.INCREMENT, 3)]

    def test_mirror_key_per_role(self):
        """Test which input id each role mirrors under."""
        binding = Binding(actuator=10, direct_key=1, cycle_key=2, increment_key=3)

        assert binding.mirror_key(KeyRole.DIRECT) == 1
        assert binding.mirror_key(KeyRole.CYCLE) == 2
        assert binding.mirror_key(KeyRole.INCREMENT) == 2
        assert binding.mirror_key(KeyRole.ACTUATOR) == 2

    def test_mirror_key_falls_back_to_direct(self):
        """Test that the direct key is used when there is no cycle key."""
        binding = Binding(actuator=10, direct_key=1)
        assert binding.mirror_key(KeyRole.ACTUATOR) == 1

    def test_mirror_key_none(self):
        """Test that actuator-only bindings have nothing to mirror under."""
        assert Binding(actuator=10).mirror_key(KeyRole.ACTUATOR) is None

    def test_select_updates_value(self):
        """Test moving the list position."""
        binding = Binding(actuator=10, values=(0, 0.5, 1))
        assert binding.select(2) == 0.5
        assert binding.state_index == 2
        assert binding.current_value == 0.5

    def test_seed_empty_values(self):
        """Test seeding a binding with an empty list."""
        binding = Binding(actuator=10, values=())
        assert binding.seed(2) is False
        assert binding.state_index == 1
        assert binding.current_value == 0

    def test_seed_none_scalar(self):
        """Test that no default on a scalar binding starts at 0."""
        binding = Binding(actuator=10, direct_key=1)
        assert binding.seed(None) is True
        assert binding.current_value == 0

    def test_seed_float_index(self):
        """Test that whole-number float indices are accepted."""
        binding = Binding(actuator=10, values=(0, 0.5, 1))
        assert binding.seed(3.0) is True
        assert binding.state_index == 3
