"""
Display formatting helpers shared by the dashboard and notifications
"""

import re


def format_bytes(num_bytes: int) -> str:
    """
    Convert bytes to a short human-readable string

    GB keeps two decimals, MB and KB are rounded to whole units.

    Examples:
        2040109465 -> "1.90 GB"
        5242880 -> "5 MB"
    """
    gb = num_bytes / 1024 / 1024 / 1024
    if gb >= 1:
        return f"{gb:.2f} GB"
    mb = num_bytes / 1024 / 1024
    if mb >= 1:
        return f"{mb:.0f} MB"
    kb = num_bytes / 1024
    if kb >= 1:
        return f"{kb:.0f} KB"
    return f"{num_bytes} B"


def format_rupiah(amount: int) -> str:
    """Format an amount with Indonesian thousands separators (15000 -> "15.000")"""
    return f"{amount:,}".replace(",", ".")


def slugify(text: str) -> str:
    """Lowercase, collapse non-alphanumerics into '-', trim leading/trailing '-'"""
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower().strip())
    return slug.strip("-")
