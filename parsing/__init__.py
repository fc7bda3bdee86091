from .bulk_parser import BulkParseResult, parse_bulk_text, parse_line

__all__ = ["BulkParseResult", "parse_bulk_text", "parse_line"]
