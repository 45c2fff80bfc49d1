# Copyright 2025 TIER IV, inc.
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

"""Runtime configuration for the project spec designer."""

import os
import logging
from dataclasses import dataclass
from typing import Optional

from .utils.logging_utils import DEFAULT_FORMAT, configure_split_stream_logging


@dataclass
class DesignerConfig:
    """Configuration class for loading and checking project specs."""
    log_level: str = "WARNING"
    print_level: str = "WARNING"
    cache_enabled: bool = False

    @classmethod
    def from_env(cls) -> 'DesignerConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv('PROJECT_SPEC_DESIGNER_LOG_LEVEL', 'WARNING'),
            print_level=os.getenv('PROJECT_SPEC_DESIGNER_PRINT_LEVEL', 'WARNING'),
            cache_enabled=os.getenv('PROJECT_SPEC_DESIGNER_CACHE_ENABLED', 'false').lower() == 'true',
        )

    def set_logging(self, log_level: Optional[str] = None) -> logging.Logger:
        """Setup logging based on configuration."""
        if log_level:
            self.log_level = log_level
        level = getattr(logging, self.log_level.upper(), logging.WARNING)
        stderr_level = getattr(logging, self.print_level.upper(), logging.WARNING)

        configure_split_stream_logging(
            level=level, stderr_level=stderr_level, formatter=logging.Formatter(DEFAULT_FORMAT)
        )

        return logging.getLogger('project_spec_designer')


# Global configuration instance
designer_config = DesignerConfig.from_env()
