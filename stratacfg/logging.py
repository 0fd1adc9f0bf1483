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

"""Diagnostic output for stratacfg.

Library code reports what it loads, merges, routes and saves through a
small Logger interface instead of printing directly. The process-wide
logger is silent until an application (or the stratacfg CLI) installs a
louder one, so importing the package never produces output.

Levels:
- verbose: one line per document loaded, overlay merged or skipped, save
- debug: additionally key routing decisions and root keys

Each line is written as "[PREFIX] message". Prefixes in use are LOAD,
OVERLAY, SAVE and MANAGER.

Example:
    Report overlay handling on stderr:
        ```python
        import sys
        from stratacfg.logging import get_logger, set_global_logger

        set_global_logger(get_logger(verbose=True, stream=sys.stderr))
        ```

    Emit from library code:
        ```python
        from stratacfg.logging import get_global_logger

        get_global_logger().verbose("OVERLAY", f"Merged overlay: {location}")
        ```
"""

from __future__ import annotations

import sys
from typing import Protocol, TextIO


class Logger(Protocol):
    """Interface the library logs through."""

    def verbose(self, prefix: str, message: str) -> None:
        """Report a document-level event (e.g., prefix "OVERLAY")."""
        ...

    def debug(self, prefix: str, message: str) -> None:
        """Report a fine-grained event (e.g., prefix "MANAGER")."""
        ...


class DefaultLogger:
    """Writes "[PREFIX] message" lines to a text stream.

    Debug output implies verbose output.
    """

    def __init__(
        self,
        verbose: bool = False,
        debug: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        """Create a logger.

        Args:
            verbose: If True, write verbose messages.
            debug: If True, write debug and verbose messages.
            stream: Destination. Defaults to the current sys.stdout at the
                time each message is written.
        """
        self._verbose = verbose or debug
        self._debug = debug
        self._stream = stream

    def _write(self, prefix: str, message: str) -> None:
        print(f"[{prefix}] {message}", file=self._stream or sys.stdout)

    def verbose(self, prefix: str, message: str) -> None:
        if self._verbose:
            self._write(prefix, message)

    def debug(self, prefix: str, message: str) -> None:
        if self._debug:
            self._write(prefix, message)


class SilentLogger:
    """Discards every message."""

    def verbose(self, prefix: str, message: str) -> None:
        pass

    def debug(self, prefix: str, message: str) -> None:
        pass


_global_logger: Logger = SilentLogger()


def get_logger(
    verbose: bool = False, debug: bool = False, stream: TextIO | None = None
) -> Logger:
    """Return a DefaultLogger with the given verbosity and destination."""
    return DefaultLogger(verbose=verbose, debug=debug, stream=stream)


def get_global_logger() -> Logger:
    """Return the process-wide logger (a SilentLogger unless replaced)."""
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Replace the process-wide logger.

    Example:
        Follow the CLI flags:
            ```python
            set_global_logger(get_logger(verbose=args.verbose, debug=args.debug))
            ```
    """
    global _global_logger
    _global_logger = logger
