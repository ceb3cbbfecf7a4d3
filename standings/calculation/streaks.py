# standings/calculation/streaks.py
import re
from typing import Any, List, Optional

from standings.models.enums import GameResult

RECORD_LENGTH = 5

# "W4", "v2", "L10": a result letter immediately followed by a count
_COMPACT_STREAK = re.compile(r"([WLVD])(\d+)", re.IGNORECASE)
# "V-V-D-V-D", "W W L": every result letter in order
_RESULT_CHAR = re.compile(r"[VDWL]")

_WIN_LETTERS = {"W", "V"}


def to_result(letter: Any) -> GameResult:
    """W or V (any case) is a win; every other value counts as a loss."""
    if isinstance(letter, GameResult):
        return letter
    return GameResult.WIN if str(letter).strip().upper() in _WIN_LETTERS else GameResult.LOSS


def parse_streak(streak: Optional[str]) -> Optional[List[GameResult]]:
    """Parses free-text streak into the last five results, oldest first.

    Compact form ("W4") fills the most recent `count` games with the streak
    result and everything before it with the opposite result. Otherwise the
    result letters are read in order, trimmed to the last five and, when
    short, left-padded with the opposite of the current first element.

    Returns None when nothing in the text looks like a result.
    """
    if not streak:
        return None

    match = _COMPACT_STREAK.search(streak)
    if match:
        result = to_result(match.group(1))
        count = min(int(match.group(2)), RECORD_LENGTH)
        record = [result.opposite] * RECORD_LENGTH
        for i in range(count):
            record[RECORD_LENGTH - 1 - i] = result
        return record

    letters = _RESULT_CHAR.findall(streak)
    if not letters:
        return None

    results = [to_result(letter) for letter in letters][-RECORD_LENGTH:]
    pad = results[0].opposite
    return [pad] * (RECORD_LENGTH - len(results)) + results
