"""Unit tests for binding table loading."""

import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import yaml

from cockpitbind.router.bindings import BindingKind
from cockpitbind.router.loader import load_bindings
from cockpitbind.router.router import KeybindRouter


class TestLoadBindings:
    """Tests for load_bindings."""

    @pytest.fixture
    def sample_config(self):
        """Create a sample binding table."""
        return {
            "lights": {
                "beacon": {
                    "actuator": 3001,
                    "direct_key": 1501,
                    "cycle_key": 1502,
                    "values": [0, 1],
                    "mirror_to_external": True,
                },
                "landing_light": {
                    "actuator": 3002,
                    "cycle_key": 1503,
                    "values": [0, 0.5, 1],
                    "default": 2,
                },
            },
            "engine": {
                "friction": {
                    "actuator": 3010,
                    "increment_key": 1510,
                    "decrement_key": 1511,
                    "values": [0, 0.5, 1],
                },
            },
        }

    @pytest.fixture
    def config_file(self, sample_config):
        """Create a temporary binding table file."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            yaml.dump(sample_config, f)
            return Path(f.name)

    @pytest.fixture
    def router(self):
        """Create a router with a mock device."""
        return KeybindRouter(MagicMock())

    def test_load_registers_all(self, router, config_file):
        """Test loading every entry."""
        assert load_bindings(router, config_file) == 3
        assert 3001 in router
        assert 3002 in router
        assert 3010 in router

    def test_loaded_fields(self, router, config_file):
        """Test that entry fields reach the binding."""
        load_bindings(router, config_file)

        beacon = router.get(3001)
        assert beacon.kind == BindingKind.CYCLE
        assert beacon.direct_key == 1501
        assert beacon.values == (0, 1)
        assert beacon.mirror_to_external is True

        assert router.current_value(3002) == 0.5
        assert router.get(3010).kind == BindingKind.STEPPED

    def test_loaded_bindings_dispatch(self, router, config_file):
        """Test that loaded keys drive the device."""
        load_bindings(router, config_file)

        assert router.dispatch(1503) is True
        router.device.perform_action.assert_called_once_with(3002, 1, True)

    def test_second_load_is_noop(self, router, config_file):
        """Test that loading twice registers nothing new."""
        load_bindings(router, config_file)
        assert load_bindings(router, config_file) == 0
        assert len(router) == 3

    def test_skip_missing_actuator(self, router, tmp_path):
        """Test that entries without an actuator are skipped."""
        path = tmp_path / "bindings.yaml"
        path.write_text("lights:\n  broken:\n    cycle_key: 1\n  fine:\n    actuator: 2\n")

        assert load_bindings(router, path) == 1
        assert 2 in router

    def test_skip_non_mapping_entries(self, router, tmp_path):
        """Test that malformed categories and entries are ignored."""
        path = tmp_path / "bindings.yaml"
        path.write_text("lights: [1, 2]\nengine:\n  bad: 5\n  good:\n    actuator: 9\n")

        assert load_bindings(router, path) == 1

    def test_load_nonexistent_file(self, router):
        """Test loading from a missing file."""
        assert load_bindings(router, Path("/nonexistent/bindings.yaml")) == 0
        assert len(router) == 0

    def test_empty_file(self, router, tmp_path):
        """Test loading an empty file."""
        path = tmp_path / "bindings.yaml"
        path.write_text("")
        assert load_bindings(router, path) == 0

    def test_top_level_list(self, router, tmp_path):
        """Test that a non-mapping document loads nothing."""
        path = tmp_path / "bindings.yaml"
        path.write_text("- 1\n- 2\n")
        assert load_bindings(router, path) == 0

    def test_invalid_yaml(self, router, tmp_path):
        """Test that a file that fails to parse loads nothing."""
        path = tmp_path / "bindings.yaml"
        path.write_text("lights: [unclosed\n")

        with patch("cockpitbind.router.loader.log_error") as mock_log_error:
            assert load_bindings(router, path) == 0

        mock_log_error.assert_called_once()

    def test_skip_unhashable_ids(self, router, tmp_path):
        """Test that entries whose ids are lists or mappings are skipped."""
        path = tmp_path / "bindings.yaml"
        path.write_text(
            "lights:\n"
            "  list_actuator:\n"
            "    actuator: [3001, 3002]\n"
            "  map_key:\n"
            "    actuator: 3003\n"
            "    cycle_key: {id: 1}\n"
            "  fine:\n"
            "    actuator: 3004\n"
            "    cycle_key: 1504\n"
        )

        with patch("cockpitbind.router.loader.logger") as mock_logger:
            assert load_bindings(router, path) == 1

        assert 3003 not in router
        assert 3004 in router
        malformed = [
            c for c in mock_logger.warning.call_args_list if c.args[0] == "binding_malformed"
        ]
        assert [c.kwargs["fields"] for c in malformed] == [["actuator"], ["cycle_key"]]
