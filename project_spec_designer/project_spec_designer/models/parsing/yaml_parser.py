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

"""YAML loading for project spec files, with optional caching and source maps."""

import yaml
import logging
from pathlib import Path
from typing import Dict, Any, Union, Optional, Tuple

from ...runtime_config import designer_config
from ...exceptions import SpecParsingError

logger = logging.getLogger(__name__)

SourceMap = Dict[str, Dict[str, int]]


class YamlParser:
    """YAML parser with caching."""

    def __init__(self, cache_enabled: Optional[bool] = None):
        """Initialize YAML parser.

        Args:
            cache_enabled: Whether to enable caching. If None, uses global config.
        """
        self.cache_enabled = cache_enabled if cache_enabled is not None else designer_config.cache_enabled
        self._cache: Dict[Path, Dict[str, Any]] = {}
        self._source_cache: Dict[Path, SourceMap] = {}

    @staticmethod
    def _json_pointer_escape(token: str) -> str:
        # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
        return token.replace("~", "~0").replace("/", "~1")

    @classmethod
    def _build_source_map_from_yaml(cls, content: str) -> SourceMap:
        """Map JSON-pointer-like paths (e.g. ``/targets/App/sources``) to 1-based line/column."""
        source_map: SourceMap = {}

        try:
            root = yaml.compose(content, Loader=yaml.SafeLoader)
        except yaml.YAMLError:
            # Syntax errors are reported by safe_load
            return source_map

        if root is None:
            return source_map

        def _record(path: str, node) -> None:
            mark = getattr(node, "start_mark", None)
            if mark is None:
                return
            source_map[path] = {"line": int(mark.line) + 1, "column": int(mark.column) + 1}

        def _walk(node, path: str) -> None:
            _record(path, node)

            if isinstance(node, yaml.nodes.MappingNode):
                for key_node, value_node in node.value:
                    key = getattr(key_node, "value", None)
                    if key is None:
                        continue
                    child_path = f"{path}/{cls._json_pointer_escape(str(key))}"
                    _walk(value_node, child_path)
            elif isinstance(node, yaml.nodes.SequenceNode):
                for idx, item_node in enumerate(node.value):
                    _walk(item_node, f"{path}/{idx}")

        _walk(root, "")
        return source_map

    @staticmethod
    def _check_file(path: Path) -> None:
        if not path.exists():
            raise SpecParsingError(f"Spec file not found: {path}")
        if not path.is_file():
            raise SpecParsingError(f"Path is not a file: {path}")

    @staticmethod
    def _parse(content: str, origin: str) -> Dict[str, Any]:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise SpecParsingError(f"Failed to parse YAML {origin}: {exc}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise SpecParsingError(f"Spec root must be a mapping in {origin}, got {type(data).__name__}")
        return data

    def load_config_with_source(self, file_path: Union[str, Path]) -> Tuple[Dict[str, Any], SourceMap]:
        """Load a YAML spec file and return ``(data, source_map)``."""
        path = Path(file_path)
        self._check_file(path)

        if self.cache_enabled and path in self._cache and path in self._source_cache:
            logger.debug(f"Loading spec (with source) from cache: {path}")
            return self._cache[path], self._source_cache[path]

        logger.debug(f"Loading spec file (with source): {path}")
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SpecParsingError(f"Failed to read spec file {path}: {exc}") from exc

        data = self._parse(content, f"file {path}")
        source_map = self._build_source_map_from_yaml(content)

        if self.cache_enabled:
            self._cache[path] = data
            self._source_cache[path] = source_map

        return data, source_map

    def load_config(self, file_path: Union[str, Path]) -> Dict[str, Any]:
        """Load a YAML spec file.

        Raises:
            SpecParsingError: If the file cannot be read or parsed
        """
        return self.load_config_with_source(file_path)[0]

    def load_config_from_string_with_source(self, content: str) -> Tuple[Dict[str, Any], SourceMap]:
        return self._parse(content, "content"), self._build_source_map_from_yaml(content)

    def load_config_from_string(self, content: str) -> Dict[str, Any]:
        return self._parse(content, "content")

    def clear_cache(self):
        """Clear the spec cache."""
        self._cache.clear()
        self._source_cache.clear()
        logger.debug("Spec cache cleared")


# Global parser instance
yaml_parser = YamlParser()
