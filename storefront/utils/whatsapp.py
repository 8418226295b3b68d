"""
WhatsApp click-through helpers
"""

import re
from typing import Dict
from urllib.parse import quote

DEFAULT_ORDER_TEMPLATE = "Halo admin, saya mau order: {{name}} ({{type}}). Bisa cek stok?"

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


def render_template(template: str, variables: Dict[str, object]) -> str:
    """Replace {{ var }} placeholders; unknown variables render as empty strings"""
    def replace(match):
        value = variables.get(match.group(1))
        return "" if value is None else str(value)

    return _PLACEHOLDER.sub(replace, template or "")


def wa_link(wa_number: str, message: str) -> str:
    """Build a wa.me link; the number is reduced to its digits"""
    digits = re.sub(r"\D", "", wa_number or "")
    # same escaping as encodeURIComponent
    text = quote(message, safe="-_.!~*'()")
    return f"https://wa.me/{digits}?text={text}"
