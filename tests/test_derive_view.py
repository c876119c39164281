import pytest

from inkloop.errors import NOT_COMPUTABLE
from inkloop.metrics import derive_view
from inkloop.view_state import VIEWS, ViewStateController


def _cards(view_model):
    return {card.title: card for card in view_model["cards"]}


class TestDeriveView:
    @pytest.mark.parametrize("view", VIEWS)
    def test_every_view_renders(self, snapshot, view):
        controller = ViewStateController(view=view)
        view_model = derive_view(snapshot, controller)
        assert view_model["view"] == view
        assert view_model["cards"]
        assert view_model["tables"]

    def test_overview_uses_selected_range(self, snapshot):
        controller = ViewStateController(range_="3m")
        cards = _cards(derive_view(snapshot, controller))
        assert cards["Total Revenue"].value == "₹1,86,000"
        assert cards["Total Revenue"].subtitle == "Last 3 months"
        assert cards["Total Revenue"].trend == 9.8

    def test_overview_without_range_filtering(self, snapshot):
        controller = ViewStateController(range_="3m", range_filtering=False)
        view_model = derive_view(snapshot, controller)
        assert _cards(view_model)["Total Revenue"].value == "₹3,31,000"
        assert len(view_model["tables"]["monthly_financials"]) == 6

    def test_financial_cards(self, snapshot):
        cards = _cards(derive_view(snapshot, ViewStateController(view="financial")))
        assert cards["Avg Monthly"].value == "₹55,167"
        assert cards["Net Profit"].subtitle == "44.7% margin"

    def test_client_cards(self, snapshot):
        cards = _cards(derive_view(snapshot, ViewStateController(view="clients")))
        assert cards["Average Client Value"].value == "₹13,792"
        assert cards["Client Lifetime Value"].value == "₹11,723"
        assert cards["Growth Rate"].value == "+16.7%"

    def test_client_cards_without_clients(self, with_clients):
        snap = with_clients(total_clients=0, active_clients=0, new_this_month=0)
        cards = _cards(derive_view(snap, ViewStateController(view="clients")))
        assert cards["Average Client Value"].value is NOT_COMPUTABLE
        assert cards["Growth Rate"].value is NOT_COMPUTABLE

    def test_projects_timeline_sliced(self, snapshot):
        view_model = derive_view(snapshot, ViewStateController(view="projects", range_="3m"))
        assert view_model["tables"]["project_timeline"]["Month"].tolist() == ["Apr", "May", "Jun"]

    def test_team_share_basis(self, snapshot):
        view_model = derive_view(snapshot, ViewStateController(view="team"), share_basis="hours")
        shares = view_model["tables"]["partners"]["Share"]
        assert shares.sum() == pytest.approx(100, abs=0.2)
        assert shares.iloc[1] > shares.iloc[2]

    def test_recomputed_on_each_call(self, snapshot, controller):
        first = derive_view(snapshot, controller)
        controller.select_view("team")
        second = derive_view(snapshot, controller)
        assert first["view"] == "overview"
        assert second["view"] == "team"
