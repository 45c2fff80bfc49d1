from .yaml_parser import YamlParser, yaml_parser
from .spec_parser import SpecParser, parse_spec_file

__all__ = ["YamlParser", "yaml_parser", "SpecParser", "parse_spec_file"]
