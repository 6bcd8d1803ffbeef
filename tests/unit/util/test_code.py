"""Unit tests for numeric code generation."""

import pytest

from cleartrack.util.code import generate_code


class TestGenerateCode:
    def test_default_length_is_six_digits(self):
        code = generate_code()

        assert len(code) == 6
        assert code.isdigit()

    @pytest.mark.parametrize("length", [1, 8, 12])
    def test_requested_length(self, length):
        code = generate_code(length)

        assert len(code) == length
        assert code.isdigit()

    def test_leading_zeros_are_kept(self):
        """Codes are strings; over many draws some must start with zero."""
        codes = [generate_code(2) for _ in range(2000)]

        assert any(code.startswith("0") for code in codes)
        assert all(len(code) == 2 for code in codes)

    def test_rejects_non_positive_length(self):
        with pytest.raises(ValueError, match="at least 1"):
            generate_code(0)
