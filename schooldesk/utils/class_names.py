import re
from typing import Optional

MIN_GRADE_LEVEL = 0
MAX_GRADE_LEVEL = 12
CLASS_SECTIONS = 'ABCDEF'

# "R" (reception) or one or two ASCII digits, then a single section letter A-F
CLASS_NAME_PATTERN = re.compile(r'^(R|\d{1,2})([A-F])$', re.IGNORECASE | re.ASCII)


def parse_class_name(name: Optional[str]) -> Optional[int]:
    """Return the grade level encoded in a class name, or None if unparseable.

    "2D" -> 2, "rf" -> 0, "12f" -> 12. Levels are not range-checked here:
    "13A" parses to 13 and is rejected later when no Grade has that level.
    """
    if not name:
        return None

    # fullmatch so a trailing newline doesn't slip past "$"
    match = CLASS_NAME_PATTERN.fullmatch(name)
    if not match:
        return None

    grade_part = match.group(1).upper()
    if grade_part == 'R':
        return 0
    return int(grade_part)


def grade_label(level: int) -> str:
    """Human-readable level token: "R" for reception, else the number."""
    return 'R' if level == 0 else str(level)


def class_name_for(level: int, section: str) -> str:
    return f'{grade_label(level)}{section.upper()}'
