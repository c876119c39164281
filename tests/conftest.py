from dataclasses import replace

import pytest

from inkloop.models import PartnerRecord
from inkloop.sample_data import DEFAULT_SNAPSHOT
from inkloop.view_state import ViewStateController


@pytest.fixture
def snapshot():
    return DEFAULT_SNAPSHOT


@pytest.fixture
def controller():
    return ViewStateController()


@pytest.fixture
def with_clients():
    def _make(**changes):
        return replace(DEFAULT_SNAPSHOT, clients=replace(DEFAULT_SNAPSHOT.clients, **changes))

    return _make


@pytest.fixture
def with_partners():
    def _make(*partners):
        records = tuple(PartnerRecord(*p) for p in partners)
        return replace(DEFAULT_SNAPSHOT, team=replace(DEFAULT_SNAPSHOT.team, partner_contribution=records))

    return _make
