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

"""Settings loading for hcl2json.

This package loads YAML settings files that provide defaults for the
conversion options, with a layered approach:

  - Built-in defaults
  - User settings ($XDG_CONFIG_HOME/hcl2json/config.yaml)
  - Project settings (.hcl2json.yaml, or the file given with --config)

The loader performs deep merging where dicts are merged recursively and
lists/scalars are replaced (last wins). Command-line flags override the
result.

Public API:

- load_settings: Load and merge settings layers
- settings_to_options: Turn settings into ConvertOptions

Example:
    Basic usage:

        from hcl2json.config import load_settings, settings_to_options

        settings = load_settings()
        options = settings_to_options(settings, property="database.engine")

"""

from .loader import DEFAULT_SETTINGS, load_settings, settings_to_options

__all__ = ["DEFAULT_SETTINGS", "load_settings", "settings_to_options"]
