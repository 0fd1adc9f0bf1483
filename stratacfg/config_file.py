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

"""Layered configuration file for stratacfg.

A ConfigFile owns one configuration tree. The tree is built from the
definition document and then overlaid, in order, by documents with the same
file name found in other directories. The definition document fixes the
shape of the tree; overlays can only change values that already exist.

Overlay Layers
--------------
1. **Definition document** (e.g., <install dir>/Editor.cfg)
   - Always required; defines every key and its default value
2. **Overlays** (<directory>/Editor.cfg for each add_location call)
   - Optional; silently skipped when the file does not exist
   - Later overlays win over earlier ones
   - Keys present only in an overlay are ignored

One overlay directory may be marked as the save location. save() writes
only the values changed at runtime into that document, leaving any other
content of the document as found.

Path Keys
---------
Keys are separator-delimited paths ("MainWindow.Size.Width"). The root key
may be given as an optional first segment ("Editor.MainWindow.Size.Width").
The last segment may name an attribute of the node reached by the previous
segments, when no child node of that name exists
("MainWindow.Colors.Foreground.R").

Example:
    Defaults shipped with the app, per-user overrides saved to app data:

        from stratacfg import ConfigFile

        config = (
            ConfigFile("Editor.cfg", base_dir=install_dir)
            .add_app_data("MyCompany/Editor", save=True)
            .add_current_directory()
        )

        width = config.get_int("MainWindow.Size.Width")
        config.set("MainWindow.Size.Width", width + 100)
        config.save()

"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import ClassVar, TypeVar

from stratacfg import locations
from stratacfg.conversion import INVARIANT, Culture, format_value, parse_value
from stratacfg.exceptions import ConfigIOError, InvalidArgumentError, KeyNotFoundError
from stratacfg.logging import get_global_logger
from stratacfg.providers import ConfigProvider, provider_for_path
from stratacfg.tree import ConfigEntry, ConfigNode, keys_equal

T = TypeVar("T")

__all__ = ["ConfigFile", "merge_into"]


def _validate_separator(separator: str) -> str:
    if not isinstance(separator, str) or len(separator) != 1:
        raise InvalidArgumentError(
            f"Key separator must be a single character, got {separator!r}."
        )
    return separator


def merge_into(node: ConfigNode, overlay: ConfigNode) -> None:
    """Copy the values of a (partial) overlay tree into node.

    Values are adopted without marking anything as changed. Children and
    attributes present only in the overlay are ignored, so the shape of
    node never changes. Keys are matched exactly.
    """
    if node.value != overlay.value:
        node.update(overlay.value, notify_parent=False)

    for overlay_attribute in overlay.attributes:
        attribute = node.find_attribute(overlay_attribute.key)
        if attribute is not None and attribute.value != overlay_attribute.value:
            attribute.update(overlay_attribute.value, notify_parent=False)

    for overlay_child in overlay.children:
        child = node.find_child(overlay_child.key)
        if child is not None:
            merge_into(child, overlay_child)


class ConfigFile:
    """A definition document plus its overlays, addressed by path keys.

    Attributes:
        default_separator: Separator used by every file and manager created
            without an explicit one. Reassign to change it process-wide.
    """

    default_separator: ClassVar[str] = "."

    def __init__(
        self,
        definition_file: str | Path,
        provider: ConfigProvider | None = None,
        *,
        culture: Culture = INVARIANT,
        ignore_case: bool = True,
        separator: str | None = None,
        base_dir: str | Path | None = None,
    ) -> None:
        """Load the definition document.

        Args:
            definition_file: Definition document. Relative paths are
                resolved against base_dir.
            provider: Document format. Selected from the file extension
                when omitted.
            culture: Number format for typed get/set.
            ignore_case: If True, keys are compared case-insensitively.
            separator: Key separator for this file. Defaults to
                ConfigFile.default_separator.
            base_dir: Base directory for a relative definition_file
                (default: current working directory).

        Raises:
            InvalidArgumentError: If definition_file is empty, the separator
                is invalid, or no provider handles the file extension.
            ConfigIOError: If the definition document does not exist.
            FormatError: If the definition document is malformed.

        """
        if definition_file is None or str(definition_file) == "":
            raise InvalidArgumentError("Please specify the configuration definition file.")

        path = Path(definition_file)
        if not path.is_absolute():
            path = Path(base_dir) / path if base_dir is not None else Path.cwd() / path
        path = path.resolve()

        if not path.is_file():
            raise ConfigIOError(f"Can't find the definition file: {path}")

        self._separator = _validate_separator(separator) if separator is not None else None
        self._definition_file = path
        self._provider = provider if provider is not None else provider_for_path(path)
        self._culture = culture
        self._ignore_case = ignore_case
        self._save_location: Path | None = None
        self._changed = False

        self._root = self._provider.load(path)

        logger = get_global_logger()
        logger.verbose("LOAD", f"Loaded definition file: {path}")
        logger.debug("LOAD", f"Root key: {self._root.key}")

    def __repr__(self) -> str:
        return (
            f"ConfigFile(root_key={self.root_key!r}, "
            f"definition_file={str(self._definition_file)!r}, "
            f"save_location={str(self._save_location) if self._save_location else None!r})"
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def root(self) -> ConfigNode:
        return self._root

    @property
    def root_key(self) -> str:
        """Key of the root node; ConfigManager registers the file under it."""
        return self._root.key

    @property
    def definition_file(self) -> Path:
        return self._definition_file

    @property
    def save_location(self) -> Path | None:
        return self._save_location

    @property
    def changed(self) -> bool:
        """True once set() has been called since the file was loaded."""
        return self._changed

    @property
    def separator(self) -> str:
        return self._separator or ConfigFile.default_separator

    @property
    def ignore_case(self) -> bool:
        return self._ignore_case

    @property
    def culture(self) -> Culture:
        return self._culture

    @property
    def provider(self) -> ConfigProvider:
        return self._provider

    # ------------------------------------------------------------------
    # Overlays
    # ------------------------------------------------------------------

    def add_location(self, directory: str | Path, save: bool = False) -> ConfigFile:
        """Add a directory to the list of overlays.

        The overlay document has the same file name as the definition
        document. If it exists (and is not the definition document itself)
        its values are merged into the tree.

        Args:
            directory: Overlay directory.
            save: If True, the overlay document becomes the save location,
                replacing any previous one; otherwise it is read-only.

        Returns:
            This ConfigFile, for chaining.

        Raises:
            InvalidArgumentError: If directory is empty.
            FormatError: If the overlay document is malformed. The tree is
                left untouched.

        """
        if directory is None or str(directory) == "":
            raise InvalidArgumentError("Please specify the target directory.")

        logger = get_global_logger()
        location = Path(directory) / self._definition_file.name

        if location.resolve() != self._definition_file and location.is_file():
            # Parse fully before touching the tree
            overlay = self._provider.load(location)
            merge_into(self._root, overlay)
            logger.verbose("OVERLAY", f"Merged overlay: {location}")
        else:
            logger.verbose("OVERLAY", f"No overlay at: {location}")

        if save:
            self._save_location = location
            logger.verbose("OVERLAY", f"Save location: {location}")

        return self

    def add_current_directory(self) -> ConfigFile:
        """Add the current working directory as a read-only overlay."""
        return self.add_location(Path.cwd(), save=False)

    def add_app_data(self, relative_path: str | Path, save: bool = False) -> ConfigFile:
        """Add a path relative to the user's application data directory."""
        return self._add_relative(locations.app_data_dir(), relative_path, save)

    def add_local_app_data(
        self, relative_path: str | Path, save: bool = False
    ) -> ConfigFile:
        """Add a path relative to the user's local application data directory."""
        return self._add_relative(locations.local_app_data_dir(), relative_path, save)

    def add_common_app_data(
        self, relative_path: str | Path, save: bool = False
    ) -> ConfigFile:
        """Add a path relative to the machine-wide application data directory."""
        return self._add_relative(locations.common_app_data_dir(), relative_path, save)

    def add_user_home(self, relative_path: str | Path, save: bool = False) -> ConfigFile:
        """Add a path relative to the user's home directory."""
        return self._add_relative(locations.home_dir(), relative_path, save)

    def add_documents(self, relative_path: str | Path, save: bool = False) -> ConfigFile:
        """Add a path relative to the user's documents directory."""
        return self._add_relative(locations.documents_dir(), relative_path, save)

    def _add_relative(
        self, base: Path, relative_path: str | Path | None, save: bool
    ) -> ConfigFile:
        if relative_path is None:
            raise InvalidArgumentError("Please specify the relative path.")
        if Path(relative_path).is_absolute():
            raise InvalidArgumentError(
                f"{relative_path} must be relative. With absolute paths use add_location instead."
            )
        return self.add_location(base / relative_path, save)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self) -> bool:
        """Save changed values to the save location.

        Returns:
            True if the document was written, False if there was nothing to
            save or no save location was set.

        Raises:
            ConfigIOError: If the save location cannot be written.

        """
        logger = get_global_logger()
        if self._save_location is None:
            logger.verbose("SAVE", f"No save location for {self.root_key}, skipping")
            return False
        if not self._changed:
            logger.verbose("SAVE", f"No changes in {self.root_key}, skipping")
            return False

        self._provider.save(self._root, self._save_location)
        logger.verbose("SAVE", f"Saved {self.root_key} to {self._save_location}")
        return True

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def get(self, key: str) -> str:
        """Get the value associated with the specified key.

        Raises:
            InvalidArgumentError: If key is empty.
            KeyNotFoundError: If the key does not resolve.

        """
        return self.resolve(key).value

    def get_as(self, key: str, target: type[T]) -> T:
        """Get the value associated with key converted to target.

        Raises:
            ConversionError: If the value cannot be converted.

        """
        return parse_value(self.get(key), target, self._culture)

    def get_int(self, key: str) -> int:
        return self.get_as(key, int)

    def get_float(self, key: str) -> float:
        return self.get_as(key, float)

    def get_bool(self, key: str) -> bool:
        return self.get_as(key, bool)

    def set(self, key: str, value: str | int | float | bool) -> None:
        """Set the value of the specified key.

        Non-string values are formatted with the file's culture.

        Raises:
            InvalidArgumentError: If key is empty or value is None.
            KeyNotFoundError: If the key does not resolve.
            ConversionError: If value has an unsupported type.

        """
        if value is None:
            raise InvalidArgumentError("value can't be None.")

        text = format_value(value, self._culture)
        self.resolve(key).update(text)
        self._changed = True

    def items(self) -> Iterator[tuple[str, str]]:
        """Yield (key, value) for every leaf node and attribute.

        Keys are relative to the root (no root segment), in document order.
        """
        sep = self.separator
        for node in self._root.walk():
            path = node.path(sep)
            if node is not self._root and node.is_leaf:
                yield path, node.value
            for attribute in node.attributes:
                yield (f"{path}{sep}{attribute.key}" if path else attribute.key), attribute.value

    # ------------------------------------------------------------------
    # Path resolution
    # ------------------------------------------------------------------

    def resolve(self, key: str) -> ConfigEntry:
        """Resolve a path key to a node or attribute.

        Child nodes are matched first; the last segment falls back to an
        attribute of the node reached so far.

        Raises:
            InvalidArgumentError: If key is empty.
            KeyNotFoundError: If a segment does not match.

        """
        if not key:
            raise InvalidArgumentError("key can't be None or empty.")

        tokens = key.split(self.separator)
        if len(tokens) > 1 and keys_equal(tokens[0], self._root.key, self._ignore_case):
            tokens = tokens[1:]

        node = self._root
        last = len(tokens) - 1
        for i, token in enumerate(tokens):
            child = node.find_child(token, self._ignore_case)
            if child is not None:
                node = child
                continue

            if i == last:
                attribute = node.find_attribute(token, self._ignore_case)
                if attribute is not None:
                    return attribute
                raise KeyNotFoundError(
                    f"Attribute {token} not found (key: {key}).", key=key, segment=token
                )
            raise KeyNotFoundError(
                f"Node {token} not found (key: {key}).", key=key, segment=token
            )

        return node
