from __future__ import annotations

import hashlib
import re
import secrets
import string as _string
from typing import Dict, Iterable, Optional, Sequence

from datautils.config import get_settings
from datautils.sorting.cache import SortConversionCache, default_cache

_RANDOM_CHARACTERS = _string.ascii_lowercase + _string.ascii_uppercase + _string.digits
_INVALID_STRINGS = re.compile(r"null|undefined|NaN|Name not available from migration")
_DEFAULT_END_CHARACTERS = (",", ".", "!")


def pence_to_pounds(value: Optional[int], symbol: Optional[str] = None) -> str:
    """1234 -> "£12.34". Missing values are treated as 0."""
    if symbol is None:
        symbol = get_settings().currency_symbol
    pence = int(value or 0)
    sign = "-" if pence < 0 else ""
    pounds, rest = divmod(abs(pence), 100)
    return f"{sign}{symbol}{pounds}.{rest:02d}"


def left(text: str, n: int) -> str:
    if n <= 0:
        return ""
    return str(text)[:n]


def right(text: str, n: int) -> str:
    if n <= 0:
        return ""
    return str(text)[-n:]


def trim(text: Optional[str]) -> Optional[str]:
    return text.strip() if text else text


def ltrim(text: str) -> str:
    return text.lstrip()


def rtrim(text: str) -> str:
    return text.rstrip()


def cap_first_letter(text: str) -> str:
    return text[:1].upper() + text[1:]


def random_string(length: int) -> str:
    return "".join(secrets.choice(_RANDOM_CHARACTERS) for _ in range(max(0, length)))


def remove_double_quotes(text: str) -> str:
    return text.replace('"', "")


def parse_letter(letter: str) -> Optional[int]:
    """Base 36 value of letter ("a" -> 10, "z" -> 35); None if it is not base 36."""
    try:
        return int(letter, 36)
    except (TypeError, ValueError):
        return None


def ends_with(search_in: str, search_for: str) -> bool:
    return search_in.endswith(search_for)


def contains(search_in: str, search_for: str) -> bool:
    return search_for in search_in


def remove_characters_from_end(text: str, characters: Optional[Iterable[str]] = None) -> str:
    """Strip any trailing run of characters (default: , . !)."""
    chars = tuple(characters) if characters else _DEFAULT_END_CHARACTERS
    index = len(text)
    while index > 0 and text[index - 1] in chars:
        index -= 1
    return text[:index]


def replace_at_index(text: str, index: int, replacement: Optional[str] = None) -> str:
    return text[:index] + (replacement or "") + text[index + 1:]


def replace_all_invalid_strings(text: Optional[str], trim_result: bool = False) -> str:
    """Remove placeholder tokens left behind by data migration ("null", "NaN", ...)."""
    cleaned = _INVALID_STRINGS.sub("", text or "")
    return cleaned.strip() if trim_result else cleaned


def line_feed_to_carriage_return(text: str) -> str:
    return text.replace("\n", "\r")


def is_valid_letter(character: str) -> bool:
    if len(character) != 1:
        return False
    return "A" <= character.upper() <= "Z"


def get_letter_as_number(letter: str, start_at: int = 0) -> int:
    """"a" -> start_at, "b" -> start_at + 1, ..."""
    return ord(letter.upper()) - ord("A") + (start_at or 0)


def remove_whitespace(text: str) -> str:
    return text.replace(" ", "")


def remove_underscores(text: str) -> str:
    return text.replace("_", "")


def contains_any(text: str, look_for: Sequence[str]) -> bool:
    return any(item in text for item in look_for)


def generate_string_hash(unhashed: str) -> str:
    return hashlib.sha256(unhashed.encode("utf-8")).hexdigest()


def count_occurrences(text: str, value: str, case_sensitive: bool = True) -> int:
    if case_sensitive is False:
        text = text.lower()
        value = value.lower()
    return text.count(value)


def replace_all(text: str, replace: str, replace_with: str) -> str:
    return text.replace(replace, replace_with)


def extract_number_from_string(text: str) -> Optional[float]:
    """
    Pull the number out of text such as "£1,234.50 inc VAT" -> 1234.5.

    Commas are treated as thousands separators. Returns None if no digits.
    """
    candidate = "".join(re.findall(r"[\d.]", text.replace(",", "")))
    match = re.match(r"\d+(?:\.\d+)?|\.\d+", candidate)
    if not match:
        return None
    return float(match.group(0))


def _conversion_map(cache: SortConversionCache) -> Dict[str, str]:
    mapping: Dict[str, str] = {}
    for entry in cache.get():
        mapping.setdefault(entry.character, entry.conversion)
    return mapping


def db_sortable(text: str, cache: Optional[SortConversionCache] = None) -> str:
    """
    Convert text into its database sortable form using the sort conversion table.

    The table is fetched on first use; raises SortConversionUnavailable if it
    cannot be fetched.
    """
    mapping = _conversion_map(cache or default_cache)
    return "".join(mapping.get(ch, ch) for ch in text)
