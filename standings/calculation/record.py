# standings/calculation/record.py
from standings.models.enums import GameResult
from standings.models.team import MergedTeam


def toggle_result(team: MergedTeam, index: int) -> MergedTeam:
    """Returns a copy of `team` with the result at `index` flipped.

    Anything that is not a win becomes a win. The input team is left untouched.
    Raises IndexError when `index` is outside the record; negative indexes
    are rejected rather than counted from the end.
    """
    if index < 0 or index >= len(team.record):
        raise IndexError(f"Record index {index} out of range for {len(team.record)} results")
    current = team.record[index]
    new_record = list(team.record)
    new_record[index] = GameResult.LOSS if current == GameResult.WIN else GameResult.WIN
    return team.model_copy(update={"record": new_record})
