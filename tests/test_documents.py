import pytest

from olimpiadas.core.documents import (
    clean_document_number,
    format_document,
    validate_cpf,
)


class TestValidateCpf:
    @pytest.mark.parametrize(
        "value",
        ["11144477735", "111.444.777-35", "529.982.247-25", " 52998224725 "],
    )
    def test_accepts_valid_numbers(self, value):
        assert validate_cpf(value) is True

    @pytest.mark.parametrize(
        "value",
        [
            "11144477734",  # wrong second check digit
            "11144477725",  # wrong first check digit
            "1114447773",  # too short
            "111444777350",  # too long
            "",
        ],
    )
    def test_rejects_invalid_numbers(self, value):
        assert validate_cpf(value) is False

    @pytest.mark.parametrize("digit", "0123456789")
    def test_rejects_repeated_digits(self, digit):
        assert validate_cpf(digit * 11) is False


def test_clean_document_number_keeps_digits_only():
    assert clean_document_number("12.345.678-9") == "123456789"
    assert clean_document_number("") == ""


class TestFormatDocument:
    def test_cpf(self):
        assert format_document("11144477735", "CPF") == "111.444.777-35"

    def test_cpf_already_punctuated(self):
        assert format_document("111.444.777-35", "CPF") == "111.444.777-35"

    def test_rg(self):
        assert format_document("123456789", "RG") == "12.345.678-9"

    def test_unexpected_length_returns_digits(self):
        assert format_document("1234-567", "RG") == "1234567"
        assert format_document("123", "CPF") == "123"


@pytest.mark.parametrize("digits", ["11144477735", "00000000191", "98765432100"])
def test_formatted_cpf_cleans_back_to_digits(digits):
    assert clean_document_number(format_document(digits, "CPF")) == digits
