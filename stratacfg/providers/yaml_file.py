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

"""YAML configuration format for stratacfg.

Nested mappings map to the node hierarchy:

- A mapping value becomes a node with children
- A scalar value becomes a leaf node; it is stored as text (booleans as
  "true"/"false", null as an empty string)
- A key starting with "@" becomes an attribute of the enclosing node

The root key is the file name without its extension. Lists have no place in
the tree and are rejected with FormatError.

Example document (Editor.yaml):

    AssetsDir: .\\Assets
    MainWindow:
      Size:
        Width: 640
      Colors:
        Foreground:
          "@R": 255
          "@G": 215
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from stratacfg.exceptions import ConfigIOError, FormatError
from stratacfg.tree import ConfigNode

from .base import register_provider

ATTRIBUTE_PREFIX = "@"


def _load_yaml_file(p: Path) -> dict[str, Any]:
    """Load a YAML file and return its top-level mapping.

    An empty document is an empty mapping.
    """
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise FormatError(f"YAML syntax error in {p}: {err}") from err
    except OSError as err:
        raise ConfigIOError(f"Failed to read {p}: {err}") from err
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FormatError(f"Top-level YAML must be a mapping (dict): {p}")
    return data


def _scalar_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _mapping_key(mapping: dict[Any, Any], key: str) -> Any:
    """Return the existing key of mapping that loads as key, else key.

    Node keys are str(raw_key), so 8080 or true keys in a document must be
    matched through their string form.
    """
    for raw_key in mapping:
        if str(raw_key) == key:
            return raw_key
    return key


class YamlProvider:
    """Nested-mapping provider backed by PyYAML."""

    def load(self, path: Path) -> ConfigNode:
        data = _load_yaml_file(path)
        root = ConfigNode(path.stem)
        self._fill_node(root, data, path)
        return root

    def save(self, root: ConfigNode, save_path: Path) -> None:
        data = _load_yaml_file(save_path) if save_path.exists() else {}
        self._update_mapping(data, root)

        try:
            save_path.parent.mkdir(parents=True, exist_ok=True)
            with save_path.open("w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        except OSError as err:
            raise ConfigIOError(f"Failed to write {save_path}: {err}") from err

    def _fill_node(self, node: ConfigNode, mapping: dict[Any, Any], path: Path) -> None:
        for raw_key, value in mapping.items():
            key = str(raw_key)
            if key.startswith(ATTRIBUTE_PREFIX):
                if isinstance(value, (dict, list)):
                    raise FormatError(
                        f"Attribute {key!r} must have a scalar value in {path}"
                    )
                node.add_attribute(key[len(ATTRIBUTE_PREFIX):], _scalar_text(value))
                continue
            if isinstance(value, list):
                raise FormatError(f"Lists are not supported ({key!r} in {path})")
            child = node.add_child(key)
            if isinstance(value, dict):
                self._fill_node(child, value, path)
            else:
                child.update(_scalar_text(value), notify_parent=False)

    def _update_mapping(self, mapping: dict[Any, Any], node: ConfigNode) -> None:
        if not node.changed:
            return

        for attribute in node.attributes:
            if attribute.changed:
                mapping[_mapping_key(mapping, ATTRIBUTE_PREFIX + attribute.key)] = attribute.value

        for child in node.children:
            if not child.changed:
                continue
            key = _mapping_key(mapping, child.key)
            if child.is_leaf and not child.attributes:
                mapping[key] = child.value
                continue
            # Nodes with attributes are mappings; their own value is not written
            existing = mapping.get(key)
            if not isinstance(existing, dict):
                existing = {}
                mapping[key] = existing
            self._update_mapping(existing, child)


register_provider("yaml", YamlProvider, extensions=(".yaml", ".yml"))
