from pathlib import Path

import pytest

from procam.modules.base.config_loader import ConfigLoader


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.txt"
    path.write_text(
        "# comment\n"
        "\n"
        "width = 640\n"
        "ratio = 1.5   # trailing comment\n"
        "enabled = yes\n"
        "color = \"#101010\"\n"
        "name = procam\n"
        "broken line\n",
        encoding="utf-8",
    )
    return path


class TestLoad:
    def test_untyped_parsing(self, config_file):
        config = ConfigLoader.load(config_file)
        assert config["width"] == 640
        assert config["ratio"] == 1.5
        assert config["enabled"] is True
        assert config["color"] == "#101010"
        assert config["name"] == "procam"
        assert "broken line" not in config

    def test_typed_against_defaults(self, config_file):
        config = ConfigLoader.load(config_file, {"width": 1.0, "enabled": False, "name": Path(".")})
        assert config["width"] == 640.0
        assert isinstance(config["width"], float)
        assert config["enabled"] is True
        assert config["name"] == Path("procam")

    def test_strict_ignores_unknown_keys(self, config_file):
        config = ConfigLoader.load(config_file, {"width": 0}, strict=True)
        assert config == {"width": 640}

    def test_missing_file_returns_defaults(self, tmp_path):
        assert ConfigLoader.load(tmp_path / "missing.txt", {"a": 1}) == {"a": 1}

    def test_bad_typed_value_falls_back(self, tmp_path):
        path = tmp_path / "config.txt"
        path.write_text("width = wide\n", encoding="utf-8")
        assert ConfigLoader.load(path, {"width": 10}) == {"width": 0}

    @pytest.mark.asyncio
    async def test_load_async(self, config_file):
        config = await ConfigLoader.load_async(config_file)
        assert config["width"] == 640
