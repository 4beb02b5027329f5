from .validator import validate_cases, pretty_summary, check_case
from .io import read_lines, write_lines, read_cases, write_cases

__all__ = ["validate_cases", "pretty_summary", "check_case", "read_cases", "write_cases"]
