"""Utility modules."""

from .export import format_report, read_json_values, write_json_values

__all__ = ["format_report", "read_json_values", "write_json_values"]
