"""Request parsing and command translation."""

from infino_gateway.query.path_parser import parse_path, parse_request
from infino_gateway.query.time_range import resolve_time_window
from infino_gateway.query.encoder import build_query_string
from infino_gateway.query.translator import CommandTranslator

__all__ = [
    "parse_path",
    "parse_request",
    "resolve_time_window",
    "build_query_string",
    "CommandTranslator",
]
