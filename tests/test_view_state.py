import itertools

import pandas as pd
import pytest

from inkloop.errors import InvalidArgument
from inkloop.view_state import RANGES, VIEWS, ViewStateController


class TestTransitions:
    def test_defaults(self, controller):
        assert controller.current_view() == "overview"
        assert controller.current_range() == "6m"

    def test_select_view(self, controller):
        controller.select_view("projects")
        assert controller.current_view() == "projects"

    def test_select_view_is_idempotent(self, controller):
        first = controller.select_view("team")
        second = controller.select_view("team")
        assert first == second

    def test_invalid_view_leaves_state(self, controller):
        controller.select_view("clients")
        with pytest.raises(InvalidArgument):
            controller.select_view("settings")
        assert controller.current_view() == "clients"

    def test_invalid_range_leaves_state(self, controller):
        with pytest.raises(InvalidArgument):
            controller.select_range("24m")
        assert controller.current_range() == "6m"

    def test_invalid_initial_state(self):
        with pytest.raises(ValueError):
            ViewStateController(view="home")

    def test_state_is_a_copy(self, controller):
        state = controller.state
        state.active_view = "team"
        assert controller.current_view() == "overview"

    def test_every_state_reachable_in_one_step(self):
        states = list(itertools.product(VIEWS, RANGES))
        assert len(states) == 15
        for (view, range_), (target_view, target_range) in itertools.product(states, states):
            controller = ViewStateController(view, range_)
            controller.select_view(target_view)
            controller.select_range(target_range)
            assert (controller.current_view(), controller.current_range()) == (target_view, target_range)


class TestRangeSlicing:
    def test_slices_sequence_to_last_n(self, controller):
        controller.select_range("3m")
        assert controller.apply_range(list(range(12))) == (9, 10, 11)

    def test_short_sequence_returned_whole(self, controller):
        controller.select_range("12m")
        assert controller.apply_range(["Jan", "Feb"]) == ("Jan", "Feb")

    def test_slices_dataframe(self, controller):
        controller.select_range("3m")
        frame = pd.DataFrame({"Month": ["Jan", "Feb", "Mar", "Apr", "May", "Jun"]})
        sliced = controller.apply_range(frame)
        assert sliced["Month"].tolist() == ["Apr", "May", "Jun"]
        assert sliced.index.tolist() == [0, 1, 2]

    def test_filtering_disabled_is_a_no_op(self):
        controller = ViewStateController(range_="3m", range_filtering=False)
        months = ("Jan", "Feb", "Mar", "Apr", "May", "Jun")
        assert controller.apply_range(months) is months

    def test_range_label(self, controller):
        assert controller.range_label() == "Last 6 months"
        assert controller.range_months() == 6
