"""Pre-condition checks run on input records before any ORM row is built."""


def require_text(value: object, field: str) -> str:
    """Trim a required text field and reject blanks."""
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    value = value.strip()
    if not value:
        raise ValueError(f"{field} cannot be empty")
    return value


def optional_text(value: object, field: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    return value.strip()


_DIGITS = "0123456789"


def _digits(chars: str) -> bool:
    # str.isdigit() also accepts non-ASCII digits
    return bool(chars) and all(ch in _DIGITS for ch in chars)


def _isbn_chars(raw: str) -> str:
    # hyphens and spaces are separators only
    return "".join(ch for ch in raw.upper() if ch not in "- ")


def is_valid_isbn10(chars: str) -> bool:
    if len(chars) != 10 or not _digits(chars[:9]):
        return False
    check = chars[9]
    if check == "X":
        last = 10
    elif check in _DIGITS:
        last = int(check)
    else:
        return False
    total = sum(int(ch) * i for i, ch in enumerate(chars[:9], start=1)) + last * 10
    return total % 11 == 0


def is_valid_isbn13(chars: str) -> bool:
    if len(chars) != 13 or not _digits(chars):
        return False
    total = sum(int(ch) * (1 if i % 2 == 0 else 3) for i, ch in enumerate(chars[:12]))
    return (10 - total % 10) % 10 == int(chars[12])


def validate_isbn(value: object) -> str:
    """
    Accept an ISBN-10 or ISBN-13 with a correct check character.
    The value is returned trimmed but otherwise as supplied.
    """
    raw = require_text(value, "isbn")
    chars = _isbn_chars(raw)
    if is_valid_isbn10(chars) or is_valid_isbn13(chars):
        return raw
    raise ValueError("isbn must be a valid ISBN-10 or ISBN-13")
