"""Parsers for host tool listing output."""

from .claude_parser import ListingParser, TextListingParser

__all__ = ["ListingParser", "TextListingParser"]
