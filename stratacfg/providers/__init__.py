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

"""Configuration document formats for stratacfg.

This package provides a pluggable provider pattern for reading and writing
configuration documents. The core (ConfigFile, ConfigManager) only sees the
ConfigProvider protocol; each format lives in its own module and registers
itself on import.

Available Providers:
    xml : XmlProvider (.xml, .cfg, .config)
        Nested elements, element attributes become ConfigAttribute.
    ini : IniProvider (.ini)
        Unsectioned entries at the root, one level of sections.
    yaml : YamlProvider (.yaml, .yml)
        Nested mappings, "@name" keys become attributes.

Example:
    Look up a provider:

        from pathlib import Path
        from stratacfg.providers import get_provider, provider_for_path

        xml = get_provider("xml")
        root = xml.load(Path("Editor.cfg"))

        ini = provider_for_path(Path("Editor.ini"))

"""

# Import provider modules to trigger self-registration
from . import (
    ini_file,  # noqa: F401
    xml_file,  # noqa: F401
    yaml_file,  # noqa: F401
)
from .base import (
    ConfigProvider,
    available_formats,
    get_provider,
    provider_for_path,
    register_provider,
)
from .ini_file import IniProvider
from .xml_file import XmlProvider
from .yaml_file import YamlProvider

__all__ = [
    "ConfigProvider",
    "IniProvider",
    "XmlProvider",
    "YamlProvider",
    "available_formats",
    "get_provider",
    "provider_for_path",
    "register_provider",
]
