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

"""One-call setup for the common application layout.

Most applications ship a definition document next to their code, keep
per-user changes under the user's application data directory and allow a
copy in the current directory to override both. open_config() wires that
layout and returns a ConfigManager the application keeps and passes
around; there is no hidden module-level instance.

Example:
    Application start-up:

        from pathlib import Path
        from stratacfg import open_config

        settings = open_config(
            "Editor.cfg",
            "MyCompany/Editor",
            base_dir=Path(__file__).parent,
        )
        print(settings.get("MainWindow.Size.Width"))

        settings.set("MainWindow.Size.Width", 1024)
        settings.save()  # writes <app data>/MyCompany/Editor/Editor.cfg

"""

from __future__ import annotations

from pathlib import Path

from stratacfg.config_file import ConfigFile
from stratacfg.manager import ConfigManager
from stratacfg.providers import ConfigProvider


def open_config(
    definition_file: str | Path,
    save_directory: str | Path,
    *,
    provider: ConfigProvider | None = None,
    base_dir: str | Path | None = None,
) -> ConfigManager:
    """Load a definition file with the standard overlays.

    Steps
      1) Load the definition document (relative to base_dir if given).
      2) Overlay <app data>/<save_directory>/<file name> and mark it as
         the save location.
      3) Overlay <cwd>/<file name> (read-only).
      4) Register the file in a new ConfigManager.

    Args:
        definition_file: Definition document.
        save_directory: Directory relative to the user's application data
            directory where changes are saved.
        provider: Document format. Selected from the file extension when
            omitted.
        base_dir: Base directory for a relative definition_file.

    Returns:
        A ConfigManager holding the loaded file.

    Raises:
        InvalidArgumentError: If save_directory is absolute.
        ConfigIOError: If the definition document does not exist.
        FormatError: If a document is malformed.

    """
    file = (
        ConfigFile(definition_file, provider, base_dir=base_dir)
        .add_app_data(save_directory, save=True)
        .add_current_directory()
    )
    return ConfigManager().add(file)
