"""Data schemas and validation."""
from .domain import Domain
from .schemas import RawResult, parse_search_rows

__all__ = [
    "Domain",
    "RawResult",
    "parse_search_rows",
]
