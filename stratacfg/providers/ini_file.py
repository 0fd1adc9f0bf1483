# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""INI configuration format for stratacfg.

The flat-sectioned form maps to a two-level tree:

- Entries before the first section header become leaf children of the root
- Each [Section] becomes a child node of the root
- Entries inside a section become leaf children of that section node

The root key is the file name without its extension. Sections cannot nest
and there are no attributes. Keys keep their case and values are taken
literally (no interpolation), so Windows paths such as .\\Assets survive.

Example document (Editor.ini):

    AssetsDir = .\\Assets

    [WindowSize]
    Width = 640
    Height = 480

Loads as Editor.AssetsDir, Editor.WindowSize.Width, Editor.WindowSize.Height.

Saving:
    The document at the save location is read, the changed entries are
    applied and the whole document is written back through configparser.
    Sections and entries not touched keep their values and order, but
    configparser does not keep comments or layout: comment lines are
    dropped and every entry is rewritten as "Key = Value". Multi-line values
    are written as indented continuation lines.
"""

from __future__ import annotations

import configparser
import io
from pathlib import Path

from stratacfg.exceptions import ConfigIOError, FormatError
from stratacfg.tree import ConfigNode

from .base import register_provider

# Entries before the first section header are read into this section
_GLOBAL_SECTION = "\x00global"


def _new_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(
        interpolation=None,
        default_section="\x00defaults",
        strict=False,
    )
    parser.optionxform = str  # type: ignore[assignment, method-assign]
    return parser


def _read_ini_file(path: Path) -> configparser.ConfigParser:
    try:
        text = path.read_text(encoding="utf-8-sig")
    except OSError as err:
        raise ConfigIOError(f"Failed to read {path}: {err}") from err

    parser = _new_parser()
    try:
        parser.read_string(f"[{_GLOBAL_SECTION}]\n{text}", source=str(path))
    except configparser.Error as err:
        raise FormatError(f"INI syntax error in {path}: {err}") from err
    return parser


def _render(parser: configparser.ConfigParser) -> str:
    buffer = io.StringIO()
    globals_ = parser[_GLOBAL_SECTION]
    for key, value in globals_.items():
        # Continuation lines are indented, as ConfigParser.write() does
        value = value.replace("\n", "\n\t")
        buffer.write(f"{key} = {value}\n")
    if len(globals_):
        buffer.write("\n")

    parser.remove_section(_GLOBAL_SECTION)
    parser.write(buffer)
    return buffer.getvalue()


class IniProvider:
    """Flat-sectioned provider backed by configparser."""

    def load(self, path: Path) -> ConfigNode:
        parser = _read_ini_file(path)
        root = ConfigNode(path.stem)

        for key, value in parser[_GLOBAL_SECTION].items():
            root.add_child(key, value)

        for section_name in parser.sections():
            if section_name == _GLOBAL_SECTION:
                continue
            section = root.add_child(section_name)
            for key, value in parser[section_name].items():
                section.add_child(key, value)

        return root

    def save(self, root: ConfigNode, save_path: Path) -> None:
        if save_path.exists():
            parser = _read_ini_file(save_path)
        else:
            parser = _new_parser()
            parser.add_section(_GLOBAL_SECTION)

        if root.changed:
            for child in root.children:
                if not child.changed:
                    continue
                if child.is_leaf:
                    parser[_GLOBAL_SECTION][child.key] = child.value
                    continue
                if not parser.has_section(child.key):
                    parser.add_section(child.key)
                for entry in child.children:
                    if entry.changed:
                        parser[child.key][entry.key] = entry.value

        try:
            save_path.parent.mkdir(parents=True, exist_ok=True)
            save_path.write_text(_render(parser), encoding="utf-8")
        except OSError as err:
            raise ConfigIOError(f"Failed to write {save_path}: {err}") from err


register_provider("ini", IniProvider, extensions=(".ini",))
