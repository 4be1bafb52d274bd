import re
from typing import Callable, Dict, List, Optional, Sequence

NUMBER_PATTERN = re.compile(r"([-+]?)(\d+(?:[.,]\d+)*)([eE][-+]?\d+)?")
GROUP_SEPARATOR = re.compile(r"[.,]")

MIN_AGE_EXCLUSIVE = 0
MAX_AGE_EXCLUSIVE = 150


class PromptValidationError(ValueError):
    """Raised by a prompt validator when a recognized answer is not acceptable."""


class InvalidAge(PromptValidationError):
    pass


def recognize_number(text: Optional[str]) -> Optional[int]:
    """Return the first integer found in ``text``.

    Separators followed by groups of exactly three digits are thousands
    separators ("30,000" and "1.000.000" are whole numbers). Otherwise a single
    separator starts a fractional part, which must be zero ("30,0" gives 30,
    "30.5" fails). Numbers in exponent notation and malformed groupings
    recognize as None.
    """
    if not text:
        return None
    match = NUMBER_PATTERN.search(text)
    if match is None:
        return None

    sign, body, exponent = match.groups()
    if exponent:
        return None

    head, *groups = GROUP_SEPARATOR.split(body)
    if groups and all(len(group) == 3 for group in groups):
        value = int(head + "".join(groups))
    elif not groups:
        value = int(head)
    elif len(groups) == 1 and set(groups[0]) == {"0"}:
        value = int(head)
    else:
        return None

    return -value if sign == "-" else value


def recognize_choice(text: Optional[str], choices: Sequence[str]) -> Optional[str]:
    """Match an answer against option labels, by label (case-insensitive) or 1-based position."""
    if not text:
        return None
    answer = text.strip().casefold()

    for choice in choices:
        if choice.casefold() == answer:
            return choice

    if answer.isdigit():
        position = int(answer)
        if 1 <= position <= len(choices):
            return choices[position - 1]
    return None


def is_valid_age(value) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and MIN_AGE_EXCLUSIVE < value < MAX_AGE_EXCLUSIVE
    )


def validate_age(value: Optional[int]) -> int:
    if not is_valid_age(value):
        raise InvalidAge(f"Age must be an integer between {MIN_AGE_EXCLUSIVE} and {MAX_AGE_EXCLUSIVE}, got {value!r}")
    return value


def unique_choices(choices: Sequence[str]) -> List[str]:
    """Drop repeated labels, keeping the first occurrence."""
    return list(dict.fromkeys(choices))


# Validators are persisted by name on the pending prompt
VALIDATORS: Dict[str, Callable[[Optional[int]], int]] = {
    "age": validate_age,
}
