# olimpiadas/core/documents.py
import re
from typing import Literal

DocumentType = Literal["CPF", "RG"]

_NON_DIGITS = re.compile(r"\D")

CPF_LENGTH = 11
RG_LENGTH = 9


def clean_document_number(value: str) -> str:
    """Strip every non-digit character (dots, dashes, spaces...)."""
    return _NON_DIGITS.sub("", value or "")


def _check_digit(digits: str, first_weight: int) -> int:
    """
    Weighted-sum check digit used by CPF.

    Weights run from `first_weight` down to 2 over the given digits;
    a remainder of 10 (or 11) maps to 0.
    """
    total = sum(int(d) * w for d, w in zip(digits, range(first_weight, 1, -1)))
    remainder = (total * 10) % 11
    return 0 if remainder >= 10 else remainder


def validate_cpf(value: str) -> bool:
    """
    Validate a Brazilian CPF number.

    Punctuation is ignored. The number is rejected when it does not have
    11 digits, when all digits are identical, or when either check digit
    does not match.
    """
    cpf = clean_document_number(value)

    if len(cpf) != CPF_LENGTH:
        return False

    if cpf == cpf[0] * CPF_LENGTH:
        return False

    first = _check_digit(cpf[:9], 10)
    second = _check_digit(cpf[:10], 11)

    return first == int(cpf[9]) and second == int(cpf[10])


def format_document(value: str, document_type: DocumentType) -> str:
    """
    Insert display punctuation into a document number.

      - CPF: ###.###.###-##
      - RG:  ##.###.###-#

    Numbers whose digit count does not fit the pattern are returned as
    plain digits.
    """
    digits = clean_document_number(value)

    if document_type == "CPF" and len(digits) == CPF_LENGTH:
        return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"

    if document_type == "RG" and len(digits) == RG_LENGTH:
        return f"{digits[:2]}.{digits[2:5]}.{digits[5:8]}-{digits[8:]}"

    return digits
