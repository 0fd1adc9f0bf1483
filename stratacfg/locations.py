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

"""Well-known directories for configuration overlays.

On Windows the usual environment variables are used, falling back to the
default profile layout when they are missing:

- app data: %APPDATA% (~/AppData/Roaming)
- local app data: %LOCALAPPDATA% (~/AppData/Local)
- common app data: %PROGRAMDATA% (C:/ProgramData)

Elsewhere the XDG base directories are used:

- app data: $XDG_CONFIG_HOME (~/.config)
- local app data: $XDG_DATA_HOME (~/.local/share)
- common app data: /usr/share

Home is Path.home() and documents is ~/Documents on every platform.
"""

from __future__ import annotations

import os
from pathlib import Path

__all__ = [
    "app_data_dir",
    "local_app_data_dir",
    "common_app_data_dir",
    "home_dir",
    "documents_dir",
]


def _is_windows() -> bool:
    return os.name == "nt"


def _env_path(name: str) -> Path | None:
    value = os.environ.get(name)
    return Path(value) if value else None


def app_data_dir() -> Path:
    """Per-user roaming application data directory."""
    if _is_windows():
        return _env_path("APPDATA") or Path.home() / "AppData" / "Roaming"
    return _env_path("XDG_CONFIG_HOME") or Path.home() / ".config"


def local_app_data_dir() -> Path:
    """Per-user, per-machine application data directory."""
    if _is_windows():
        return _env_path("LOCALAPPDATA") or Path.home() / "AppData" / "Local"
    return _env_path("XDG_DATA_HOME") or Path.home() / ".local" / "share"


def common_app_data_dir() -> Path:
    """Machine-wide application data directory."""
    if _is_windows():
        return _env_path("PROGRAMDATA") or Path("C:/ProgramData")
    return Path("/usr/share")


def home_dir() -> Path:
    return Path.home()


def documents_dir() -> Path:
    return Path.home() / "Documents"
