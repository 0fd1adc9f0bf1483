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

"""XML configuration format for stratacfg.

Element nesting maps to the node hierarchy and element attributes map to
ConfigAttribute. An element without child elements is a leaf whose value is
its stripped text. Comments and processing instructions are ignored and
namespace prefixes are dropped.

Example document:

    <Editor>
      <AssetsDir>.\\Assets</AssetsDir>
      <MainWindow>
        <Size>
          <Width>640</Width>
        </Size>
        <Colors>
          <Foreground R="255" G="215" B="0" />
        </Colors>
      </MainWindow>
    </Editor>

Saving writes only nodes and attributes flagged as changed into the document
already at the save location (or a new <Editor/> document), so a partial
overlay keeps its partial shape.
"""

from __future__ import annotations

from pathlib import Path

from lxml import etree as ET

from stratacfg.exceptions import ConfigIOError, FormatError
from stratacfg.tree import ConfigNode

from .base import register_provider


def _local_name(tag: str) -> str:
    return ET.QName(tag).localname


def _parse_xml_file(path: Path, keep_comments: bool = False) -> ET._Element:
    try:
        parser = ET.XMLParser(resolve_entities=False, remove_comments=not keep_comments)
        tree = ET.parse(str(path), parser)
    except ET.XMLSyntaxError as err:
        raise FormatError(f"XML syntax error in {path}: {err}") from err
    except OSError as err:
        raise ConfigIOError(f"Failed to read {path}: {err}") from err
    return tree.getroot()


def _element_children(element: ET._Element) -> list[ET._Element]:
    # Skip processing instructions and entities
    return [child for child in element if isinstance(child.tag, str)]


class XmlProvider:
    """Structured-markup provider backed by lxml."""

    def load(self, path: Path) -> ConfigNode:
        element = _parse_xml_file(path)
        root = ConfigNode(_local_name(element.tag))
        self._fill_node(root, element)
        return root

    def save(self, root: ConfigNode, save_path: Path) -> None:
        if save_path.exists():
            element = _parse_xml_file(save_path, keep_comments=True)
        else:
            element = ET.Element(root.key)

        try:
            self._update_element(element, root)
        except ValueError as err:
            # lxml rejects control characters and other non-XML text
            raise FormatError(f"Cannot write {save_path} as XML: {err}") from err

        try:
            save_path.parent.mkdir(parents=True, exist_ok=True)
            ET.indent(element, space="  ")
            element.getroottree().write(
                str(save_path),
                encoding="utf-8",
                xml_declaration=True,
                pretty_print=True,
            )
        except OSError as err:
            raise ConfigIOError(f"Failed to write {save_path}: {err}") from err

    def _fill_node(self, node: ConfigNode, element: ET._Element) -> None:
        for name, value in element.attrib.items():
            node.add_attribute(_local_name(name), value)

        children = _element_children(element)
        if children:
            for child_element in children:
                child = node.add_child(_local_name(child_element.tag))
                self._fill_node(child, child_element)
        else:
            node.update((element.text or "").strip(), notify_parent=False)

    def _update_element(self, element: ET._Element, node: ConfigNode) -> None:
        if not node.changed:
            return

        # A value on a node with children is not serialized
        if node.is_leaf:
            element.text = node.value

        for attribute in node.attributes:
            if attribute.changed:
                element.set(attribute.key, attribute.value)

        for child in node.children:
            if not child.changed:
                continue
            child_element = self._find_element(element, child.key)
            if child_element is None:
                child_element = ET.SubElement(element, child.key)
            self._update_element(child_element, child)

    @staticmethod
    def _find_element(element: ET._Element, key: str) -> ET._Element | None:
        for child in _element_children(element):
            if _local_name(child.tag) == key:
                return child
        return None


register_provider("xml", XmlProvider, extensions=(".xml", ".cfg", ".config"))
