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

"""Format provider base protocol and registry for stratacfg.

This module defines the foundational components for the provider system:

- ConfigProvider protocol: Interface that all document formats implement
- Provider registry: Global dict mapping format names to implementations
- Extension map: Global dict mapping file suffixes to format names
- Registration and lookup functions: register_provider(), get_provider()
  and provider_for_path()

A provider converts a document on disk into a ConfigNode tree (load) and
writes the changed parts of a tree back to a document (save). The core never
branches on the document format; new formats are added by implementing the
protocol and registering the class.

Design Philosophy:
    - Providers are Protocol classes (structural subtyping, not inheritance)
    - Registration happens at module import time (providers self-register)
    - Registry is a simple dict (no complex dependency injection needed)
    - Each provider is stateless and can be instantiated on-demand

Example:
    Implementing a custom provider:
        ```python
        from pathlib import Path
        from stratacfg.providers.base import register_provider
        from stratacfg.tree import ConfigNode

        class JsonProvider:
            def load(self, path: Path) -> ConfigNode:
                ...

            def save(self, root: ConfigNode, save_path: Path) -> None:
                ...

        register_provider("json", JsonProvider, extensions=(".json",))
        ```

"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from stratacfg.exceptions import InvalidArgumentError
from stratacfg.tree import ConfigNode

# -------------------------------
# Provider Protocol
# -------------------------------


class ConfigProvider(Protocol):
    """Protocol for configuration document formats."""

    def load(self, path: Path) -> ConfigNode:
        """Load a document into a configuration tree.

        Args:
            path: Document to read.

        Returns:
            Root node of the loaded tree. No node or attribute is marked
            as changed.

        Raises:
            ConfigIOError: If the document cannot be read.
            FormatError: If the document is malformed.

        """
        ...

    def save(self, root: ConfigNode, save_path: Path) -> None:
        """Write the changed parts of a tree to a document.

        Existing content of the document at save_path that the tree did
        not change is left as found. A missing document is created with
        a root named after root.key, and missing directories are created.

        Args:
            root: Root node of the tree to save.
            save_path: Full path of the document to write.

        Raises:
            ConfigIOError: If the destination cannot be written.
            FormatError: If the existing document is malformed.

        """
        ...


# -------------------------------
# Provider Registry
# -------------------------------

_PROVIDER_REGISTRY: dict[str, type[ConfigProvider]] = {}
_EXTENSION_MAP: dict[str, str] = {}


def register_provider(
    name: str,
    provider_class: type[ConfigProvider],
    extensions: Iterable[str] = (),
) -> None:
    """Register a format provider by name in the global registry.

    Registering the same name or extension twice overwrites the previous
    registration (allows monkey-patching for tests).

    Args:
        name: Format name (e.g., "xml"). Lowercase.
        provider_class: The provider class to register.
        extensions: File suffixes, including the dot, that select this
            provider in provider_for_path().

    """
    _PROVIDER_REGISTRY[name] = provider_class
    for ext in extensions:
        _EXTENSION_MAP[ext.lower()] = name


def get_provider(name: str) -> ConfigProvider:
    """Get a new provider instance by format name.

    Raises:
        InvalidArgumentError: If the format name is not registered. The
            message lists the available formats.

    """
    if name not in _PROVIDER_REGISTRY:
        available = ", ".join(sorted(_PROVIDER_REGISTRY))
        raise InvalidArgumentError(
            f"Unknown configuration format: {name!r}. Available: {available or '(none)'}"
        )
    return _PROVIDER_REGISTRY[name]()


def provider_for_path(path: Path) -> ConfigProvider:
    """Get a provider instance selected by the file suffix of path.

    Raises:
        InvalidArgumentError: If no provider is registered for the suffix.

    """
    suffix = path.suffix.lower()
    name = _EXTENSION_MAP.get(suffix)
    if name is None:
        known = ", ".join(sorted(_EXTENSION_MAP))
        raise InvalidArgumentError(
            f"No configuration format registered for {suffix or '(no extension)'!r} "
            f"({path.name}). Known extensions: {known or '(none)'}"
        )
    return get_provider(name)


def available_formats() -> list[str]:
    """Return the registered format names, sorted."""
    return sorted(_PROVIDER_REGISTRY)
