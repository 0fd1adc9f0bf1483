"""
Tests for stratacfg.config_file module.

Tests path resolution and value access including:
- Nodes, attributes and the optional root qualifier
- Case-insensitive and case-sensitive lookup
- Typed get/set
- Separator configuration
- Error handling
"""

from __future__ import annotations

from pathlib import Path

import pytest

from stratacfg.config_file import ConfigFile
from stratacfg.conversion import Culture
from stratacfg.exceptions import (
    ConfigIOError,
    ConversionError,
    FormatError,
    InvalidArgumentError,
    KeyNotFoundError,
)
from stratacfg.providers import XmlProvider
from stratacfg.tree import ConfigAttribute, ConfigNode


@pytest.fixture
def config(editor_cfg: Path) -> ConfigFile:
    return ConfigFile(editor_cfg, XmlProvider())


class TestLoading:
    """Tests for loading the definition document."""

    def test_root_key(self, config):
        """Test that the root key comes from the document root."""
        assert config.root_key == "Editor"

    def test_relative_path_uses_base_dir(self, app_dir):
        """Test that relative definition files resolve against base_dir."""
        config = ConfigFile("Editor.cfg", base_dir=app_dir)

        assert config.definition_file == (app_dir / "Editor.cfg").resolve()

    def test_relative_path_uses_cwd(self, app_dir, monkeypatch):
        """Test that relative definition files default to the cwd."""
        monkeypatch.chdir(app_dir)

        config = ConfigFile("Editor.cfg")

        assert config.get("AssetsDir") == ".\\Assets"

    def test_provider_from_extension(self, editor_cfg):
        """Test that the provider is selected from the file extension."""
        config = ConfigFile(editor_cfg)

        assert isinstance(config.provider, XmlProvider)

    def test_missing_definition_raises(self, tmp_path):
        """Test that a missing definition file raises ConfigIOError."""
        with pytest.raises(ConfigIOError, match="Can't find the definition file"):
            ConfigFile(tmp_path / "Missing.cfg")

    def test_empty_definition_raises(self):
        """Test that an empty file name is rejected."""
        with pytest.raises(InvalidArgumentError):
            ConfigFile("")

    def test_unknown_extension_raises(self, tmp_path):
        """Test that files without a registered format are rejected."""
        definition = tmp_path / "Editor.txt"
        definition.write_text("AssetsDir = x\n", encoding="utf-8")

        with pytest.raises(InvalidArgumentError, match="No configuration format"):
            ConfigFile(definition)

    def test_malformed_definition_raises(self, tmp_path):
        """Test that broken XML raises FormatError."""
        definition = tmp_path / "Broken.cfg"
        definition.write_text("<Broken><Open></Broken>", encoding="utf-8")

        with pytest.raises(FormatError):
            ConfigFile(definition)

    def test_fresh_file_is_unchanged(self, config):
        """Test that nothing is marked as changed after loading."""
        assert not config.changed
        assert not config.root.changed


class TestGet:
    """Tests for reading values."""

    def test_get_simple_option(self, config):
        """Test reading a top-level leaf."""
        assert config.get("AssetsDir") == ".\\Assets"

    def test_get_nested_option(self, config):
        """Test reading a nested leaf."""
        assert config.get("MainWindow.Size.Width") == "640"

    def test_get_attribute(self, config):
        """Test that the last segment falls back to an attribute."""
        assert config.get("MainWindow.Colors.Foreground.G") == "215"

    def test_get_with_root_qualifier(self, config):
        """Test that the root key may be given as the first segment."""
        assert config.get("Editor.MainWindow.Size.Width") == "640"
        assert config.get("Editor.AssetsDir") == config.get("AssetsDir")

    def test_node_wins_over_attribute(self, tmp_path):
        """Test that a child node shadows an attribute with the same key."""
        definition = tmp_path / "Shadow.cfg"
        definition.write_text(
            '<Shadow><Item Name="attr"><Name>node</Name></Item></Shadow>',
            encoding="utf-8",
        )
        config = ConfigFile(definition)

        assert config.get("Item.Name") == "node"

    def test_resolve_returns_node_or_attribute(self, config):
        """Test resolve() target types."""
        assert isinstance(config.resolve("MainWindow.Size"), ConfigNode)
        assert isinstance(config.resolve("MainWindow.Colors.Foreground.R"), ConfigAttribute)

    def test_get_as_int(self, config):
        """Test typed read of an attribute."""
        assert config.get_int("MainWindow.Colors.Foreground.R") == 255
        assert config.get_as("MainWindow.Size.Height", int) == 480

    def test_get_as_double(self, config):
        """Test typed read of a float."""
        assert config.get_float("MainWindow.Font.Size") == pytest.approx(18.5)

    def test_get_as_bool(self, config):
        """Test typed read of a boolean."""
        assert config.get_bool("MainWindow.Maximized") is False

    def test_get_as_invalid_raises(self, config):
        """Test that unconvertible values raise ConversionError."""
        with pytest.raises(ConversionError):
            config.get_int("MainWindow.Font.Family")

    def test_culture_is_used_for_conversion(self, tmp_path):
        """Test that the file culture drives typed access."""
        definition = tmp_path / "Locale.cfg"
        definition.write_text("<Locale><Ratio>1,5</Ratio></Locale>", encoding="utf-8")
        config = ConfigFile(definition, culture=Culture("de", decimal_point=","))

        assert config.get_float("Ratio") == pytest.approx(1.5)
        config.set("Ratio", 2.25)
        assert config.get("Ratio") == "2,25"


class TestResolutionErrors:
    """Tests for keys that do not resolve."""

    def test_empty_key_raises(self, config):
        """Test that an empty key is rejected."""
        with pytest.raises(InvalidArgumentError):
            config.get("")

    def test_missing_intermediate_node(self, config):
        """Test that a failing segment before the last names the node."""
        with pytest.raises(KeyNotFoundError, match="Node Missing not found") as exc_info:
            config.get("MainWindow.Missing.Width")

        assert exc_info.value.segment == "Missing"
        assert exc_info.value.key == "MainWindow.Missing.Width"

    def test_missing_attribute(self, config):
        """Test that a failing last segment names the attribute."""
        with pytest.raises(KeyNotFoundError, match="Attribute A not found") as exc_info:
            config.get("MainWindow.Colors.Foreground.A")

        assert exc_info.value.segment == "A"

    def test_attribute_is_never_intermediate(self, config):
        """Test that attributes cannot appear in the middle of a key."""
        with pytest.raises(KeyNotFoundError):
            config.get("MainWindow.Colors.Foreground.R.Value")

    def test_root_key_alone_is_not_a_value(self, config):
        """Test that the bare root key does not resolve."""
        with pytest.raises(KeyNotFoundError):
            config.get("Editor")

    def test_key_not_found_is_a_key_error(self, config):
        """Test that callers can catch KeyError."""
        with pytest.raises(KeyError):
            config.get("Nope")


class TestCaseSensitivity:
    """Tests for case rules."""

    def test_ignore_case_by_default(self, config):
        """Test that lookups are case-insensitive by default."""
        assert config.get("mainwindow.size.height") == "480"
        assert config.get("mainwindow.cOlOrs.foreGround.b") == "0"
        assert config.get("editor.MainWindow.Size.Width") == "640"

    def test_set_ignores_case(self, config):
        """Test that set uses the same case rule."""
        config.set("mainwindow.size.height", "320")

        assert config.get("MainWindow.Size.Height") == "320"

    def test_case_sensitive_mode(self, editor_cfg):
        """Test that differently cased keys fail in case-sensitive mode."""
        config = ConfigFile(editor_cfg, ignore_case=False)

        assert config.get("MainWindow.Size.Width") == "640"
        with pytest.raises(KeyNotFoundError):
            config.get("mainwindow.size.width")
        with pytest.raises(KeyNotFoundError):
            config.get("MainWindow.Colors.Foreground.r")


class TestSet:
    """Tests for writing values."""

    def test_set_round_trip(self, config):
        """Test that set followed by get returns the new value."""
        assert config.get("MainWindow.Size.Width") == "640"

        config.set("MainWindow.Size.Width", "768")

        assert config.get("MainWindow.Size.Width") == "768"
        assert config.changed

    def test_set_as_int(self, config):
        """Test typed write."""
        config.set("MainWindow.Size.Height", 768)

        assert config.get("MainWindow.Size.Height") == "768"
        assert config.get_int("MainWindow.Size.Height") == 768

    def test_set_attribute(self, config):
        """Test writing an attribute."""
        config.set("MainWindow.Colors.Foreground.B", 11)

        attribute = config.resolve("MainWindow.Colors.Foreground.B")
        assert attribute.value == "11"
        assert attribute.changed
        assert config.root.changed

    def test_set_bool_and_float(self, config):
        """Test writing booleans and floats."""
        config.set("MainWindow.Maximized", True)
        config.set("MainWindow.Font.Size", 12.25)

        assert config.get("MainWindow.Maximized") == "true"
        assert config.get_float("MainWindow.Font.Size") == pytest.approx(12.25)

    def test_set_none_raises(self, config):
        """Test that None values are rejected."""
        with pytest.raises(InvalidArgumentError):
            config.set("AssetsDir", None)

        assert not config.changed

    def test_set_missing_key_raises(self, config):
        """Test that set does not create keys."""
        with pytest.raises(KeyNotFoundError):
            config.set("MainWindow.Title", "Editor")

    def test_set_marks_only_path(self, config):
        """Test that only the changed path is flagged."""
        config.set("MainWindow.Size.Width", 800)

        assert config.resolve("MainWindow.Size").changed
        assert not config.resolve("MainWindow.Font").changed
        assert not config.resolve("AssetsDir").changed


class TestSeparator:
    """Tests for key separator configuration."""

    def test_custom_separator(self, editor_cfg):
        """Test a per-file separator."""
        config = ConfigFile(editor_cfg, separator="/")

        assert config.get("MainWindow/Size/Width") == "640"
        with pytest.raises(KeyNotFoundError):
            config.get("MainWindow.Size.Width")

    def test_global_default_separator(self, editor_cfg):
        """Test that the class-level default applies to files without one."""
        config = ConfigFile(editor_cfg)
        ConfigFile.default_separator = ":"

        assert config.get("MainWindow:Colors:Foreground:R") == "255"

    def test_invalid_separator(self, editor_cfg):
        """Test that multi-character separators are rejected."""
        with pytest.raises(InvalidArgumentError, match="single character"):
            ConfigFile(editor_cfg, separator="::")


class TestItems:
    """Tests for enumerating values."""

    def test_items_lists_leaves_and_attributes(self, config):
        """Test that items() yields every value in document order."""
        items = list(config.items())

        assert items[0] == ("AssetsDir", ".\\Assets")
        assert ("MainWindow.Size.Width", "640") in items
        assert ("MainWindow.Colors.Foreground.G", "215") in items
        assert all(not key.startswith("Editor") for key, _ in items)

    def test_items_keys_resolve(self, config):
        """Test that every enumerated key resolves to its value."""
        for key, value in config.items():
            assert config.get(key) == value
