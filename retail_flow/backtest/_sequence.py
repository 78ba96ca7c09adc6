"""Input checks shared by the simulators."""

from typing import Sequence

from ..data.models import MergedRecord
from ..errors import SimulationError


def check_ascending(records: Sequence[MergedRecord], simulator: str) -> None:
    """
    Raises:
        SimulationError: If records are not strictly ascending by date
    """
    for index in range(1, len(records)):
        if records[index].date <= records[index - 1].date:
            raise SimulationError(
                f"Records must be strictly ascending by date; "
                f"{records[index].date} follows {records[index - 1].date}",
                simulator=simulator,
                bar_index=index
            )
