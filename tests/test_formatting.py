"""
Tests for display formatting and WhatsApp helpers
"""
import pytest

from storefront.utils.formatting import format_bytes, format_rupiah, slugify
from storefront.utils.whatsapp import DEFAULT_ORDER_TEMPLATE, render_template, wa_link


@pytest.mark.parametrize("num_bytes, expected", [
    (500, "500 B"),
    (2048, "2 KB"),
    (5 * 1024 * 1024, "5 MB"),
    (2 * 1024 * 1024 * 1024, "2.00 GB"),
    (2040109465, "1.90 GB"),
])
def test_format_bytes(num_bytes, expected):
    assert format_bytes(num_bytes) == expected


@pytest.mark.parametrize("amount, expected", [
    (0, "0"),
    (500, "500"),
    (15000, "15.000"),
    (1250000, "1.250.000"),
])
def test_format_rupiah(amount, expected):
    assert format_rupiah(amount) == expected


@pytest.mark.parametrize("text, expected", [
    ("Hello World", "hello-world"),
    ("  Promo 12.12!! ", "promo-12-12"),
    ("---", ""),
])
def test_slugify(text, expected):
    assert slugify(text) == expected


class TestWhatsApp:

    def test_default_template(self):
        message = render_template(DEFAULT_ORDER_TEMPLATE, {"name": "Netflix", "type": "SHARING"})
        assert message == "Halo admin, saya mau order: Netflix (SHARING). Bisa cek stok?"

    def test_unknown_and_empty_variables_render_blank(self):
        message = render_template("{{ name }}|{{missing}}|{{price}}", {"name": "Canva", "price": None})
        assert message == "Canva||"

    def test_link_keeps_only_digits(self):
        link = wa_link("+62 812-3456-7890", "Halo admin, saya")
        assert link == "https://wa.me/6281234567890?text=Halo%20admin%2C%20saya"

    def test_link_escapes_like_encode_uri_component(self):
        link = wa_link("628", "Netflix (SHARING)? 50%")
        assert link.endswith("?text=Netflix%20(SHARING)%3F%2050%25")
