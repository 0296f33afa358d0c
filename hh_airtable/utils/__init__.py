"""Utility modules."""

from .parser import decode_json, parse_resume_detail, parse_search_result, read_json

__all__ = ["read_json", "decode_json", "parse_resume_detail", "parse_search_result"]
