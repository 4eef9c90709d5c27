"""Tests for verification code generation and hashing."""

import pytest
from unittest.mock import patch

from modules.verification.codes import code_matches, generate_code, hash_code


class TestGenerateCode:
    def test_six_digits(self):
        for _ in range(200):
            code = generate_code()
            assert len(code) == 6
            assert code.isdigit()
            assert 100000 <= int(code) <= 999999

    def test_lower_bound(self):
        with patch("modules.verification.codes.secrets.randbelow", return_value=0):
            assert generate_code() == "100000"

    def test_upper_bound(self):
        with patch("modules.verification.codes.secrets.randbelow", return_value=899999):
            assert generate_code() == "999999"


class TestHashing:
    @pytest.mark.asyncio
    async def test_hash_is_not_plaintext(self):
        code_hash = await hash_code("123456")
        assert "123456" not in code_hash
        assert code_hash.startswith("$2")

    @pytest.mark.asyncio
    async def test_matching_code(self):
        code_hash = await hash_code("123456")
        assert await code_matches("123456", code_hash) is True

    @pytest.mark.asyncio
    async def test_wrong_code(self):
        code_hash = await hash_code("123456")
        assert await code_matches("654321", code_hash) is False

    @pytest.mark.asyncio
    async def test_malformed_hash_does_not_match(self):
        assert await code_matches("123456", "not-a-bcrypt-hash") is False
