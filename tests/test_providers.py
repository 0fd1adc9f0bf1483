"""
Tests for stratacfg.providers package.

Tests the format providers including:
- Registry lookup by name and by file extension
- XML, INI and YAML loading rules
- Malformed documents
"""

from __future__ import annotations

from pathlib import Path

import pytest

from stratacfg.exceptions import ConfigIOError, FormatError, InvalidArgumentError
from stratacfg.providers import (
    IniProvider,
    XmlProvider,
    YamlProvider,
    available_formats,
    get_provider,
    provider_for_path,
    register_provider,
)
from stratacfg.providers import base
from stratacfg.tree import ConfigNode


class TestRegistry:
    """Tests for provider registration and lookup."""

    def test_builtin_formats(self):
        """Test that the built-in providers register on import."""
        assert {"xml", "ini", "yaml"} <= set(available_formats())

    def test_get_provider(self):
        """Test lookup by format name."""
        assert isinstance(get_provider("xml"), XmlProvider)
        assert isinstance(get_provider("ini"), IniProvider)
        assert isinstance(get_provider("yaml"), YamlProvider)

    def test_get_unknown_provider(self):
        """Test that unknown names list the available formats."""
        with pytest.raises(InvalidArgumentError, match="Available"):
            get_provider("toml")

    def test_provider_for_path(self):
        """Test lookup by file extension, case-insensitively."""
        assert isinstance(provider_for_path(Path("Editor.cfg")), XmlProvider)
        assert isinstance(provider_for_path(Path("App.CONFIG")), XmlProvider)
        assert isinstance(provider_for_path(Path("Editor.ini")), IniProvider)
        assert isinstance(provider_for_path(Path("Editor.yml")), YamlProvider)

    def test_provider_for_unknown_extension(self):
        """Test that unregistered extensions are rejected."""
        with pytest.raises(InvalidArgumentError, match="No configuration format"):
            provider_for_path(Path("Editor"))

    def test_register_custom_provider(self, monkeypatch, tmp_path):
        """Test registering a new format."""
        monkeypatch.setattr(base, "_PROVIDER_REGISTRY", dict(base._PROVIDER_REGISTRY))
        monkeypatch.setattr(base, "_EXTENSION_MAP", dict(base._EXTENSION_MAP))

        class LinesProvider:
            def load(self, path: Path) -> ConfigNode:
                root = ConfigNode(path.stem)
                for line in path.read_text(encoding="utf-8").splitlines():
                    key, _, value = line.partition("=")
                    root.add_child(key, value)
                return root

            def save(self, root: ConfigNode, save_path: Path) -> None:
                pass

        register_provider("lines", LinesProvider, extensions=(".lines",))
        document = tmp_path / "App.lines"
        document.write_text("Width=640\n", encoding="utf-8")

        provider = provider_for_path(document)

        assert isinstance(provider, LinesProvider)
        assert provider.load(document).find_child("Width").value == "640"
        assert "lines" in available_formats()


class TestXmlProvider:
    """Tests for loading XML documents."""

    def test_load_fixture(self, editor_cfg):
        """Test element and attribute mapping."""
        root = XmlProvider().load(editor_cfg)

        assert root.key == "Editor"
        assert [child.key for child in root.children] == ["AssetsDir", "MainWindow"]
        foreground = root.find_child("MainWindow").find_child("Colors").find_child("Foreground")
        assert [(a.key, a.value) for a in foreground.attributes] == [
            ("R", "255"),
            ("G", "215"),
            ("B", "0"),
        ]

    def test_comments_are_ignored(self, tmp_path):
        """Test that comments produce no nodes."""
        document = tmp_path / "App.xml"
        document.write_text(
            "<App><!-- note --><Width>640<!-- px --></Width></App>", encoding="utf-8"
        )

        root = XmlProvider().load(document)

        assert [child.key for child in root.children] == ["Width"]
        assert root.find_child("Width").value == "640"

    def test_namespaces_are_dropped(self, tmp_path):
        """Test that namespace prefixes do not appear in keys."""
        document = tmp_path / "App.xml"
        document.write_text(
            '<App xmlns="urn:example" xmlns:x="urn:x"><Size x:Unit="px">'
            "<Width>640</Width></Size></App>",
            encoding="utf-8",
        )

        root = XmlProvider().load(document)

        size = root.find_child("Size")
        assert root.key == "App"
        assert size.find_child("Width").value == "640"
        assert size.find_attribute("Unit").value == "px"

    def test_leaf_text_is_stripped(self, tmp_path):
        """Test that surrounding whitespace is removed from values."""
        document = tmp_path / "App.xml"
        document.write_text("<App><Name>\n  Editor  \n</Name></App>", encoding="utf-8")

        assert XmlProvider().load(document).find_child("Name").value == "Editor"

    def test_external_entities_not_resolved(self, tmp_path):
        """Test that external entities are not expanded."""
        secret = tmp_path / "secret.txt"
        secret.write_text("secret", encoding="utf-8")
        document = tmp_path / "App.xml"
        document.write_text(
            f'<!DOCTYPE App [<!ENTITY ext SYSTEM "{secret.as_uri()}">]>'
            "<App><Name>&ext;</Name></App>",
            encoding="utf-8",
        )

        root = XmlProvider().load(document)

        assert "secret" not in root.find_child("Name").value

    def test_malformed(self, tmp_path):
        """Test that syntax errors raise FormatError."""
        document = tmp_path / "App.xml"
        document.write_text("<App><Width></App>", encoding="utf-8")

        with pytest.raises(FormatError, match="XML syntax error"):
            XmlProvider().load(document)

    def test_missing_file(self, tmp_path):
        """Test that unreadable documents raise ConfigIOError."""
        with pytest.raises(ConfigIOError):
            XmlProvider().load(tmp_path / "Missing.xml")


class TestIniProvider:
    """Tests for loading INI documents."""

    def test_load_fixture(self, editor_ini):
        """Test global entries and sections."""
        root = IniProvider().load(editor_ini)

        assert root.key == "Editor"
        assert [child.key for child in root.children] == [
            "AssetsDir",
            "WindowSize",
            "Font",
            "AlternateFont",
        ]
        assert root.find_child("AssetsDir").value == ".\\Assets"
        assert root.find_child("AlternateFont").find_child("Family").value == "Consolas"

    def test_keys_keep_case(self, editor_ini):
        """Test that option names are not lowercased."""
        root = IniProvider().load(editor_ini)

        assert root.find_child("WindowSize").find_child("Width") is not None

    def test_no_interpolation(self, tmp_path):
        """Test that percent signs are kept literally."""
        document = tmp_path / "App.ini"
        document.write_text("[Format]\nPattern = %(name)s 100%\n", encoding="utf-8")

        root = IniProvider().load(document)

        assert root.find_child("Format").find_child("Pattern").value == "%(name)s 100%"

    def test_no_attributes(self, editor_ini):
        """Test that INI documents never produce attributes."""
        root = IniProvider().load(editor_ini)

        assert all(not node.attributes for node in root.walk())

    def test_malformed(self, tmp_path):
        """Test that syntax errors raise FormatError."""
        document = tmp_path / "App.ini"
        document.write_text("[Section\nKey = value\n", encoding="utf-8")

        with pytest.raises(FormatError, match="INI syntax error"):
            IniProvider().load(document)


class TestYamlProvider:
    """Tests for loading YAML documents."""

    def test_load_fixture(self, editor_yaml):
        """Test nested mappings, scalars and attributes."""
        root = YamlProvider().load(editor_yaml)

        window = root.find_child("MainWindow")
        assert root.key == "Editor"
        assert window.find_child("Size").find_child("Width").value == "640"
        assert window.find_child("Font").find_child("Size").value == "18.5"
        assert window.find_child("Maximized").value == "false"
        foreground = window.find_child("Colors").find_child("Foreground")
        assert foreground.find_attribute("G").value == "215"
        assert foreground.children == []

    def test_null_is_empty(self, tmp_path):
        """Test that null scalars load as empty strings."""
        document = tmp_path / "App.yaml"
        document.write_text("Name:\n", encoding="utf-8")

        assert YamlProvider().load(document).find_child("Name").value == ""

    def test_empty_document(self, tmp_path):
        """Test that an empty document gives an empty root."""
        document = tmp_path / "App.yaml"
        document.write_text("", encoding="utf-8")

        root = YamlProvider().load(document)

        assert root.key == "App"
        assert root.children == []

    def test_lists_rejected(self, tmp_path):
        """Test that sequences raise FormatError."""
        document = tmp_path / "App.yaml"
        document.write_text("Recent:\n  - a.txt\n  - b.txt\n", encoding="utf-8")

        with pytest.raises(FormatError, match="Lists are not supported"):
            YamlProvider().load(document)

    def test_top_level_must_be_mapping(self, tmp_path):
        """Test that a scalar document is rejected."""
        document = tmp_path / "App.yaml"
        document.write_text("just text\n", encoding="utf-8")

        with pytest.raises(FormatError, match="mapping"):
            YamlProvider().load(document)

    def test_attribute_must_be_scalar(self, tmp_path):
        """Test that nested attribute values are rejected."""
        document = tmp_path / "App.yaml"
        document.write_text('Color:\n  "@R":\n    x: 1\n', encoding="utf-8")

        with pytest.raises(FormatError, match="scalar"):
            YamlProvider().load(document)

    def test_malformed(self, tmp_path):
        """Test that syntax errors raise FormatError."""
        document = tmp_path / "App.yaml"
        document.write_text("Size: [unclosed\n", encoding="utf-8")

        with pytest.raises(FormatError, match="YAML syntax error"):
            YamlProvider().load(document)
