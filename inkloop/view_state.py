import logging
from dataclasses import dataclass, replace
from typing import Dict, Tuple

import pandas as pd

from inkloop.errors import InvalidArgument

logger = logging.getLogger(__name__)

VIEWS: Tuple[str, ...] = ("overview", "financial", "clients", "projects", "team")
RANGES: Tuple[str, ...] = ("3m", "6m", "12m")
RANGE_MONTHS: Dict[str, int] = {"3m": 3, "6m": 6, "12m": 12}
RANGE_LABELS: Dict[str, str] = {
    "3m": "Last 3 months",
    "6m": "Last 6 months",
    "12m": "Last 12 months",
}

DEFAULT_VIEW = "overview"
DEFAULT_RANGE = "6m"


@dataclass
class ViewState:
    active_view: str = DEFAULT_VIEW
    selected_range: str = DEFAULT_RANGE


def _check(value: str, allowed: Tuple[str, ...], kind: str) -> str:
    if value not in allowed:
        raise InvalidArgument(f"Unknown {kind} {value!r}; expected one of {', '.join(allowed)}")
    return value


class ViewStateController:
    """Owns the active view and the selected time range for one session.

    ``range_filtering`` decides whether the selected range slices monthly
    series (``apply_range``) or is purely cosmetic.
    """

    def __init__(self, view: str = DEFAULT_VIEW, range_: str = DEFAULT_RANGE, range_filtering: bool = True):
        self._state = ViewState(_check(view, VIEWS, "view"), _check(range_, RANGES, "range"))
        self.range_filtering = range_filtering

    @property
    def state(self) -> ViewState:
        return replace(self._state)

    def current_view(self) -> str:
        return self._state.active_view

    def current_range(self) -> str:
        return self._state.selected_range

    def range_months(self) -> int:
        return RANGE_MONTHS[self._state.selected_range]

    def range_label(self) -> str:
        return RANGE_LABELS[self._state.selected_range]

    def select_view(self, name: str) -> ViewState:
        _check(name, VIEWS, "view")
        if name != self._state.active_view:
            logger.debug("View %s -> %s", self._state.active_view, name)
            self._state.active_view = name
        return self.state

    def select_range(self, range_: str) -> ViewState:
        _check(range_, RANGES, "range")
        if range_ != self._state.selected_range:
            logger.debug("Range %s -> %s", self._state.selected_range, range_)
            self._state.selected_range = range_
        return self.state

    def apply_range(self, records):
        """Keep the last N months of an ordered sequence or DataFrame."""
        if not self.range_filtering:
            return records
        n_months = self.range_months()
        if isinstance(records, pd.DataFrame):
            return records.tail(n_months).reset_index(drop=True)
        return tuple(records)[-n_months:]
