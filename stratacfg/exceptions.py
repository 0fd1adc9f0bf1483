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

"""Exception hierarchy for stratacfg.

This module defines a custom exception hierarchy that allows library users
to distinguish between different types of errors:

- InvalidArgumentError: Empty keys, missing values, bad directory arguments
- ConfigIOError: Missing definition file, unreadable or unwritable documents
- FormatError: Malformed document content
- KeyNotFoundError: A path segment or attribute does not exist
- ConversionError: A string could not be converted to the requested type
- AmbiguousKeyError: The manager cannot tell which file a key belongs to

All exceptions inherit from StrataCfgError, allowing users to catch all
stratacfg errors with a single except clause if needed. Each one also
derives from the closest builtin exception (ValueError, OSError, KeyError,
LookupError) so code that already handles builtins keeps working.

Example:
    Catching specific error types:
        ```python
        from stratacfg import ConfigFile
        from stratacfg.exceptions import ConversionError, KeyNotFoundError

        config = ConfigFile("Editor.cfg")
        try:
            width = config.get_int("MainWindow.Size.Width")
        except KeyNotFoundError as e:
            print(f"No such setting: {e.segment}")
        except ConversionError as e:
            print(f"Not a number: {e.value!r}")
        ```

    Catching all stratacfg errors:
        ```python
        from stratacfg.exceptions import StrataCfgError

        try:
            manager.set("Editor.AssetsDir", "Data")
        except StrataCfgError as e:
            print(f"stratacfg error: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "StrataCfgError",
    "InvalidArgumentError",
    "ConfigIOError",
    "FormatError",
    "KeyNotFoundError",
    "ConversionError",
    "AmbiguousKeyError",
]


class StrataCfgError(Exception):
    """Base exception for all stratacfg errors.

    All stratacfg-specific exceptions inherit from this class, allowing users
    to catch all stratacfg errors with a single except clause if needed.
    """

    pass


class InvalidArgumentError(StrataCfgError, ValueError):
    """Raised when a caller passes an unusable argument.

    This exception is raised when there are problems with:

    - Empty or None keys
    - None values passed to set()
    - Missing or absolute paths where a relative directory is required
    - Unknown document formats or invalid separators
    - Registering two files with the same root key in a manager
    """

    pass


class ConfigIOError(StrataCfgError, OSError):
    """Raised for file system errors.

    This exception is raised when there are problems with:

    - A definition file that does not exist
    - A document that cannot be read
    - A save location that cannot be created or written
    """

    pass


class FormatError(StrataCfgError, ValueError):
    """Raised when a document cannot be parsed into a configuration tree.

    Example:
        Handling a corrupt overlay:
            ```python
            try:
                config.add_location(user_dir)
            except FormatError as e:
                print(f"Ignoring broken user settings: {e}")
            ```
    """

    pass


class KeyNotFoundError(StrataCfgError, KeyError):
    """Raised when a path key does not resolve to a node or attribute.

    Attributes:
        key: The full key that was requested.
        segment: The first segment that could not be matched.
    """

    def __init__(self, message: str, *, key: str, segment: str) -> None:
        super().__init__(message)
        self.key = key
        self.segment = segment

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class ConversionError(StrataCfgError, ValueError):
    """Raised when a value cannot be converted to or from a string.

    Attributes:
        value: The value that failed to convert.
        target: The requested type.
    """

    def __init__(self, message: str, *, value: object, target: type) -> None:
        super().__init__(message)
        self.value = value
        self.target = target


class AmbiguousKeyError(StrataCfgError, LookupError):
    """Raised when a manager key does not name one of several registered files.

    Example:
        Qualify keys when several files are registered:
            ```python
            manager = ConfigManager().add(editor).add(model)
            manager.get("AssetsDir")         # AmbiguousKeyError
            manager.get("Editor.AssetsDir")  # OK
            ```
    """

    pass
