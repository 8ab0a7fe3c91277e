"""
Tests: display formatting and hashing helpers.

Run with:
    pytest kenlo_pricing/tests/test_utils.py -v
"""

import hashlib

from kenlo_pricing.utils.formatters import format_currency, format_number, format_unit_price
from kenlo_pricing.utils.hashing import file_sha256, sha256_hash


class TestFormatters:
    def test_thousands_and_decimals(self):
        assert format_number(1234.5, 2) == "1.234,50"
        assert format_number(1234567) == "1.234.567"
        assert format_number(999) == "999"

    def test_negative(self):
        assert format_number(-1500) == "-1.500"

    def test_currency(self):
        assert format_currency(1175) == "R$ 1.175,00"
        assert format_currency(0) == "R$ 0,00"

    def test_unit_price_keeps_cents(self):
        assert format_unit_price(2.5) == "2,50"
        assert format_unit_price(37) == "37,00"


class TestHashing:
    def test_text_and_bytes_agree(self):
        assert sha256_hash("catálogo") == sha256_hash("catálogo".encode("utf-8"))

    def test_file_digest_matches_content(self, tmp_path):
        path = tmp_path / "blob.bin"
        content = b"x" * 200_000
        path.write_bytes(content)
        assert file_sha256(path) == hashlib.sha256(content).hexdigest()
        assert file_sha256(path) == sha256_hash(content)
