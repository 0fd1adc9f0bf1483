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

"""stratacfg - layered application settings

A Python library and CLI for reading application settings from a definition
document overlaid by per-user and per-machine copies, with typed path-key
access and persistence of only the values changed at runtime.

stratacfg provides:

- XML, INI and YAML documents behind one provider interface
- Ordered overlays that override values but never add keys
- Dotted path keys that reach nodes and attributes, case-insensitive by default
- Typed get/set for int, float, bool and str
- Saving of changed values only, into a single writable overlay
- A manager that routes "File.Key" across several files

Quick Start:
Read a setting from the command line:

    $ stratacfg get Editor.cfg MainWindow.Size.Width

From Python:

    from stratacfg import ConfigFile

    config = ConfigFile("Editor.cfg").add_app_data("MyCompany/Editor", save=True)
    config.set("MainWindow.Size.Width", 1024)
    config.save()

For more details, see the individual module docstrings.
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "Layered application settings with overlays and selective saving"

# Re-export commonly used names for convenience
from stratacfg.config_file import ConfigFile
from stratacfg.conversion import INVARIANT, Culture
from stratacfg.exceptions import (
    AmbiguousKeyError,
    ConfigIOError,
    ConversionError,
    FormatError,
    InvalidArgumentError,
    KeyNotFoundError,
    StrataCfgError,
)
from stratacfg.loader import open_config
from stratacfg.manager import ConfigManager
from stratacfg.providers import IniProvider, XmlProvider, YamlProvider
from stratacfg.tree import ConfigAttribute, ConfigNode

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "ConfigFile",
    "ConfigManager",
    "ConfigNode",
    "ConfigAttribute",
    "Culture",
    "INVARIANT",
    "XmlProvider",
    "IniProvider",
    "YamlProvider",
    "open_config",
    "StrataCfgError",
    "InvalidArgumentError",
    "ConfigIOError",
    "FormatError",
    "KeyNotFoundError",
    "ConversionError",
    "AmbiguousKeyError",
]
