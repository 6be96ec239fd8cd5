# Copyright 2024 The marco-docker Authors
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

"""
Parsers for YAML agent configuration files.
"""
import yaml
from typing import Dict, Any

# Keys accepted in a config file, named after the command line flags
CONFIG_KEYS = ('marco', 'endpoint', 'ports', 'env', 'frequency', 'match', 'timeout')

class ConfigFileParser:
    """
    Parser for agent config files such as::

        marco: http://marco.internal:81
        ports: [80, 8080]
        frequency: 30
    """
    def parse(self, config_path: str) -> Dict[str, Any]:
        """
        Parses a config file from a path.

        :param config_path: Path to the config file.
        :return: Settings keyed by flag name.
        """
        with open(config_path, 'r') as f:
            content = f.read()
        return self.parse_from_string(content)

    def parse_from_string(self, content: str) -> Dict[str, Any]:
        """
        Parses a config file from a string.

        :param content: YAML content of the config file.
        :return: Settings keyed by flag name.
        :raises ValueError: If the document is not a mapping or has unknown keys.
        """
        data = yaml.safe_load(content)
        if not data:
            return {}
        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping")

        unknown = sorted(set(data) - set(CONFIG_KEYS))
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")

        settings = dict(data)
        # Allow the allowlist to be written as a YAML list
        if isinstance(settings.get('ports'), list):
            settings['ports'] = ','.join(str(p) for p in settings['ports'])
        return settings
