"""Parsing of comma-separated query parameters."""


def parse_category(category: str) -> tuple[list[str], int]:
    """Split a comma-separated category string and return the sorted parts and their count."""
    parts = sorted(category.split(","))
    return parts, len(parts)