"""
Unit tests for PentacellConfig.
"""

import pytest

from pentacell import InvalidResolution
from pentacell.config import PentacellConfig


class TestPentacellConfig:
    """Test defaults, validation and YAML I/O."""

    def test_defaults(self):
        config = PentacellConfig()
        assert config.resolution == 9
        assert config.boundary_segments is None
        assert config.strict is True
        assert config.log_level == "INFO"

    def test_log_level_normalised(self):
        assert PentacellConfig(log_level="debug").log_level == "DEBUG"

    def test_bad_log_level(self):
        with pytest.raises(ValueError, match="log_level"):
            PentacellConfig(log_level="LOUD")

    def test_bad_resolution(self):
        with pytest.raises(InvalidResolution):
            PentacellConfig(resolution=30)

    def test_unknown_keys(self):
        with pytest.raises(ValueError, match="Unknown config keys"):
            PentacellConfig.from_dict({"resolution": 3, "colour": "blue"})

    def test_yaml_round_trip(self, tmp_path):
        config = PentacellConfig(resolution=12, boundary_segments=4, strict=False,
                                 lon_col="lon", lat_col="lat", log_level="WARNING")
        path = config.to_yaml(tmp_path / "pentacell.yaml")
        assert PentacellConfig.from_yaml(path) == config

    def test_partial_yaml(self, tmp_path):
        path = tmp_path / "partial.yaml"
        path.write_text("resolution: 4\nlon_col: x\n")
        config = PentacellConfig.from_yaml(path)
        assert config.resolution == 4
        assert config.lon_col == "x"
        assert config.lat_col == "latitude"

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert PentacellConfig.from_yaml(path) == PentacellConfig()

    def test_non_mapping_yaml(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError, match="mapping"):
            PentacellConfig.from_yaml(path)

    def test_ring_closure_is_not_configurable(self):
        with pytest.raises(ValueError, match="Unknown config keys"):
            PentacellConfig.from_dict({"closed_ring": False})
