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

"""Routing of fully-qualified keys across several configuration files.

A ConfigManager holds ConfigFile instances keyed by their root key and
dispatches "File.Path.To.Key" to the file named by the first segment.

Routing Rules
-------------
- The first segment names a registered file: the rest of the key goes to it
- Exactly one file is registered: the whole key goes to that file, so the
  root qualifier is optional
- Several files are registered and the first segment names none of them:
  AmbiguousKeyError

Example:
    Two files side by side:

        from stratacfg import ConfigFile, ConfigManager

        manager = (
            ConfigManager()
            .add(ConfigFile("Editor.cfg"))
            .add(ConfigFile("Model.cfg"))
        )
        manager.get("Editor.MainWindow.Size.Width")
        manager.get_int("Model.Mesh.Subdivision.Level")
        manager.save()

"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TypeVar

from stratacfg.config_file import ConfigFile
from stratacfg.exceptions import AmbiguousKeyError, InvalidArgumentError
from stratacfg.logging import get_global_logger

T = TypeVar("T")

__all__ = ["ConfigManager"]


class ConfigManager:
    """A collection of configuration files addressed by root key."""

    def __init__(self, separator: str | None = None) -> None:
        """Create an empty manager.

        Args:
            separator: Separator between the file segment and the rest of
                the key. Defaults to ConfigFile.default_separator.
        """
        if separator is not None and (not isinstance(separator, str) or len(separator) != 1):
            raise InvalidArgumentError(
                f"Key separator must be a single character, got {separator!r}."
            )
        self._separator = separator
        self._files: dict[str, ConfigFile] = {}

    def __contains__(self, root_key: object) -> bool:
        return root_key in self._files

    def __len__(self) -> int:
        return len(self._files)

    def __repr__(self) -> str:
        return f"ConfigManager(files={list(self._files)!r})"

    @property
    def separator(self) -> str:
        return self._separator or ConfigFile.default_separator

    @property
    def files(self) -> Mapping[str, ConfigFile]:
        """Read-only view of the registered files by root key."""
        return MappingProxyType(self._files)

    def add(self, file: ConfigFile) -> ConfigManager:
        """Register a configuration file under its root key.

        Returns:
            This ConfigManager, for chaining.

        Raises:
            InvalidArgumentError: If file is None or a file with the same
                root key is already registered.

        """
        if file is None:
            raise InvalidArgumentError("Please specify the configuration file.")
        if file.root_key in self._files:
            raise InvalidArgumentError(
                f"A configuration file with root key {file.root_key!r} is already registered."
            )

        self._files[file.root_key] = file
        get_global_logger().verbose(
            "MANAGER", f"Registered {file.root_key!r} ({file.definition_file})"
        )
        return self

    def save(self) -> None:
        """Save every registered file that has changes and a save location."""
        for file in self._files.values():
            file.save()

    def get(self, key: str) -> str:
        file, file_key = self._split_key(key)
        return file.get(file_key)

    def get_as(self, key: str, target: type[T]) -> T:
        file, file_key = self._split_key(key)
        return file.get_as(file_key, target)

    def get_int(self, key: str) -> int:
        return self.get_as(key, int)

    def get_float(self, key: str) -> float:
        return self.get_as(key, float)

    def get_bool(self, key: str) -> bool:
        return self.get_as(key, bool)

    def set(self, key: str, value: str | int | float | bool) -> None:
        file, file_key = self._split_key(key)
        file.set(file_key, value)

    def _split_key(self, key: str) -> tuple[ConfigFile, str]:
        if not key:
            raise InvalidArgumentError("key can't be None or empty.")

        logger = get_global_logger()
        prefix, found, remainder = key.partition(self.separator)

        if found and prefix in self._files:
            logger.debug("MANAGER", f"Routing {key!r} to {prefix!r}")
            return self._files[prefix], remainder

        if len(self._files) == 1:
            (file,) = self._files.values()
            logger.debug("MANAGER", f"Routing unqualified {key!r} to {file.root_key!r}")
            return file, key

        raise AmbiguousKeyError(
            f"Please provide a fully qualified key: {key!r} does not name one of "
            f"{len(self._files)} registered files ({', '.join(self._files) or 'none'})."
        )
