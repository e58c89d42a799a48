"""
Token and line parsing for the accounting exports.

Values arrive in Brazilian locale ("R$ 1.234,56", "-500,00", "R$ -") and
lines are either plain semicolon-separated or comma-separated with
double-quoted spans.
"""

import math
import re
from typing import List, Optional

# Exports print an empty money cell as "R$ -"
NO_VALUE_SENTINELS = {"R$ -", "R$-", "-"}

_CURRENCY_RE = re.compile(r"R\$\s*")
_WHITESPACE_RE = re.compile(r"\s")


def try_parse_numero(token: Optional[str]) -> Optional[float]:
    """
    Parse a locale-formatted number, keeping its sign.

    Returns 0.0 for blank tokens and no-value sentinels, None when the
    token has content that is not a number.
    """
    if token is None:
        return 0.0
    text = str(token).strip()
    if not text or text in NO_VALUE_SENTINELS:
        return 0.0

    text = _CURRENCY_RE.sub("", text)
    text = _WHITESPACE_RE.sub("", text)
    # Thousands separators out, then only the first comma is the decimal mark
    text = text.replace(".", "").replace(",", ".", 1)
    # float() would also accept digit grouping with underscores ("1_000")
    if "_" in text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def try_parse_valor(token: Optional[str]) -> Optional[float]:
    """Like try_parse_numero but always non-negative."""
    number = try_parse_numero(token)
    if number is None:
        return None
    return abs(number)


def parse_valor(token: Optional[str]) -> float:
    """Convert a currency token to a non-negative float; invalid input is 0."""
    value = try_parse_valor(token)
    return value if value is not None else 0.0


def parse_numero(token: Optional[str]) -> float:
    """Signed variant of parse_valor (quantities may be negative on returns)."""
    number = try_parse_numero(token)
    return number if number is not None else 0.0


def format_valor(value: float) -> str:
    """Format a number as BRL for display: 1234.56 -> 'R$ 1.234,56'."""
    return f"R$ {float(value):,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")


def split_quoted_line(line: str, delimiter: str = ",") -> List[str]:
    """
    Split a line on delimiter, ignoring delimiters inside double quotes.

    Quote characters toggle the quoted state and are dropped. Doubled
    quotes ("") are not unescaped: they simply toggle twice.
    """
    fields = []
    current = []
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
    fields.append("".join(current))
    return fields


def split_line(line: str, delimiter: str, quoted: bool) -> List[str]:
    """Split with the quote-aware splitter or a plain str.split."""
    if quoted:
        return split_quoted_line(line, delimiter)
    return line.split(delimiter)


def strip_bom(text: str) -> str:
    return text.lstrip("\ufeff")
