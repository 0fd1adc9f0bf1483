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

"""In-memory configuration tree for stratacfg.

A configuration document is represented as a tree of ConfigNode objects.
Every node has a key, a string value, an ordered list of child nodes and an
ordered list of ConfigAttribute key/value pairs. Format providers build the
tree when loading a document and walk it when saving.

Ownership:
    Parents own their children and attributes. The parent back-reference
    is a weak reference used only to propagate change flags upward and to
    compute a node's path; it never keeps a node alive.

Change Tracking:
    update(value) marks the node (or attribute) as changed and walks the
    parent chain marking every ancestor. Providers save only the subtrees
    whose changed flag is set. update(value, notify_parent=False) replaces
    the value silently; overlay merging uses it so values read from disk
    are never written back.

Example:
    Build and modify a tree:
        ```python
        from stratacfg.tree import ConfigNode

        root = ConfigNode("Editor")
        size = root.add_child("MainWindow").add_child("Size")
        width = size.add_child("Width", "640")

        width.update("768")
        assert root.changed and size.changed
        ```
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Protocol
import weakref

__all__ = ["ConfigEntry", "ConfigNode", "ConfigAttribute", "keys_equal"]


def keys_equal(left: str, right: str, ignore_case: bool = False) -> bool:
    """Compare two keys, optionally case-folded."""
    if ignore_case:
        return left.casefold() == right.casefold()
    return left == right


def _find(items: Iterable[ConfigEntry], key: str, ignore_case: bool):
    # First match wins; duplicate sibling keys are not diagnosed.
    for item in items:
        if keys_equal(item.key, key, ignore_case):
            return item
    return None


class ConfigEntry(Protocol):
    """Common surface of nodes and attributes returned by path resolution."""

    @property
    def key(self) -> str: ...

    @property
    def value(self) -> str: ...

    @property
    def changed(self) -> bool: ...

    def update(self, value: str, notify_parent: bool = True) -> None: ...


class ConfigNode:
    """A named node in the configuration tree.

    Attributes:
        children: Child nodes in document order.
        attributes: Node attributes in document order.
    """

    def __init__(
        self, key: str, value: str = "", parent: ConfigNode | None = None
    ) -> None:
        self._key = key
        self._value = value
        self._parent = weakref.ref(parent) if parent is not None else None
        self._changed = False
        self.children: list[ConfigNode] = []
        self.attributes: list[ConfigAttribute] = []

    def __repr__(self) -> str:
        return (
            f"ConfigNode(key={self._key!r}, value={self._value!r}, "
            f"children={len(self.children)}, attributes={len(self.attributes)})"
        )

    @property
    def key(self) -> str:
        return self._key

    @property
    def value(self) -> str:
        return self._value

    @property
    def changed(self) -> bool:
        return self._changed

    @property
    def parent(self) -> ConfigNode | None:
        return self._parent() if self._parent is not None else None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def add_child(self, key: str, value: str = "") -> ConfigNode:
        """Create a child node, append it and return it."""
        child = ConfigNode(key, value, parent=self)
        self.children.append(child)
        return child

    def add_attribute(self, key: str, value: str = "") -> ConfigAttribute:
        """Create an attribute, append it and return it."""
        attribute = ConfigAttribute(key, value, parent=self)
        self.attributes.append(attribute)
        return attribute

    def find_child(self, key: str, ignore_case: bool = False) -> ConfigNode | None:
        return _find(self.children, key, ignore_case)

    def find_attribute(
        self, key: str, ignore_case: bool = False
    ) -> ConfigAttribute | None:
        return _find(self.attributes, key, ignore_case)

    def update(self, value: str, notify_parent: bool = True) -> None:
        """Replace the node value.

        Args:
            value: New value.
            notify_parent: If True, mark this node and all of its ancestors
                as changed. If False, replace the value without touching
                any change flag.
        """
        self._value = value
        if notify_parent:
            self.mark_changed()

    def mark_changed(self) -> None:
        """Mark this node and every ancestor up to the root as changed."""
        node: ConfigNode | None = self
        while node is not None:
            node._changed = True
            node = node.parent

    def lineage(self) -> list[ConfigNode]:
        """Return the nodes from the root down to (and including) this node."""
        nodes = []
        node: ConfigNode | None = self
        while node is not None:
            nodes.append(node)
            node = node.parent
        nodes.reverse()
        return nodes

    def path(self, separator: str = ".") -> str:
        """Return the key of this node relative to the root (root excluded)."""
        return separator.join(node.key for node in self.lineage()[1:])

    def walk(self) -> Iterator[ConfigNode]:
        """Yield this node and all descendants, depth first in document order."""
        yield self
        for child in self.children:
            yield from child.walk()


class ConfigAttribute:
    """A key/value pair attached to a ConfigNode.

    Attributes never own children; they only appear as the last segment
    of a path key.
    """

    def __init__(self, key: str, value: str = "", parent: ConfigNode | None = None):
        self._key = key
        self._value = value
        self._parent = weakref.ref(parent) if parent is not None else None
        self._changed = False

    def __repr__(self) -> str:
        return f"ConfigAttribute(key={self._key!r}, value={self._value!r})"

    @property
    def key(self) -> str:
        return self._key

    @property
    def value(self) -> str:
        return self._value

    @property
    def changed(self) -> bool:
        return self._changed

    @property
    def parent(self) -> ConfigNode | None:
        return self._parent() if self._parent is not None else None

    def update(self, value: str, notify_parent: bool = True) -> None:
        """Replace the attribute value.

        When notify_parent is True the attribute and its owning node chain
        are marked as changed.
        """
        self._value = value
        if notify_parent:
            self._changed = True
            parent = self.parent
            if parent is not None:
                parent.mark_changed()
