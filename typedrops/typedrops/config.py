# Copyright 2026 TIER IV, inc.
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

"""Configuration management for typedrops."""

import os
import logging
from dataclasses import dataclass

from .utils.logging_utils import configure_split_stream_logging, DEFAULT_FORMAT


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class TypeDropsConfig:
    """Runtime settings for the schema loader and the command line tool."""
    log_level: str = "WARNING"
    print_level: str = "ERROR"
    cache_enabled: bool = True
    atomize: bool = False

    @classmethod
    def from_env(cls) -> 'TypeDropsConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv('TYPEDROPS_LOG_LEVEL', 'WARNING'),
            print_level=os.getenv('TYPEDROPS_PRINT_LEVEL', 'ERROR'),
            cache_enabled=_env_flag('TYPEDROPS_CACHE_ENABLED', 'true'),
            atomize=_env_flag('TYPEDROPS_ATOMIZE', 'false'),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.WARNING)
        stderr_level = getattr(logging, self.print_level.upper(), logging.ERROR)

        formatter = logging.Formatter(DEFAULT_FORMAT)
        configure_split_stream_logging(level=level, stderr_level=stderr_level, formatter=formatter)

        return logging.getLogger('typedrops')


# Global configuration instance
typedrops_config = TypeDropsConfig.from_env()
