import json

import pytest
import yaml

from inkloop.errors import SnapshotError
from inkloop.io import load_snapshot, read_payload
from inkloop.models import DashboardSnapshot
from inkloop.sample_data import DEFAULT_SNAPSHOT


class TestSnapshotPayload:
    def test_round_trip(self, snapshot):
        assert DashboardSnapshot.from_dict(snapshot.to_dict()) == snapshot

    def test_camel_case_payload(self, snapshot):
        payload = snapshot.to_dict()
        assert payload["financialData"]["totalRevenue"] == 331000
        assert payload["teamData"]["partnerContribution"][0] == {"name": "Shanil", "hours": 214, "revenue": 89000}

    def test_snake_case_payload(self, snapshot):
        payload = snapshot.to_dict()
        payload["financial_data"] = payload.pop("financialData")
        payload["financial_data"]["total_revenue"] = payload["financial_data"].pop("totalRevenue")
        assert DashboardSnapshot.from_dict(payload).financial.total_revenue == 331000

    def test_missing_section(self, snapshot):
        payload = snapshot.to_dict()
        del payload["teamData"]
        with pytest.raises(SnapshotError, match="teamData"):
            DashboardSnapshot.from_dict(payload)

    def test_missing_nested_field(self, snapshot):
        payload = snapshot.to_dict()
        del payload["projectData"]["projectsByMonth"][2]["started"]
        with pytest.raises(SnapshotError, match=r"projectsByMonth\[2\]"):
            DashboardSnapshot.from_dict(payload)

    def test_snapshot_is_frozen(self, snapshot):
        with pytest.raises(AttributeError):
            snapshot.clients.total_clients = 0

    def test_frames_keep_input_order(self, snapshot):
        assert snapshot.financial.to_frame()["month"].tolist() == ["Jan", "Feb", "Mar", "Apr", "May", "Jun"]
        assert snapshot.team.to_frame().columns.tolist() == ["name", "hours", "revenue"]


class TestLoadSnapshot:
    def test_no_path_uses_sample(self):
        assert load_snapshot(None) is DEFAULT_SNAPSHOT

    def test_missing_file_uses_sample(self, tmp_path):
        assert load_snapshot(str(tmp_path / "nope.json")) is DEFAULT_SNAPSHOT

    def test_json_file(self, tmp_path, snapshot):
        path = tmp_path / "snapshot.json"
        payload = snapshot.to_dict()
        payload["clientData"]["totalClients"] = 30
        path.write_text(json.dumps(payload), encoding="utf-8")
        loaded = load_snapshot(str(path))
        assert loaded.clients.total_clients == 30
        assert loaded.source == str(path)

    def test_yaml_file(self, tmp_path, snapshot):
        path = tmp_path / "snapshot.yaml"
        path.write_text(yaml.safe_dump(snapshot.to_dict()), encoding="utf-8")
        assert load_snapshot(str(path)) == snapshot

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SnapshotError):
            read_payload(str(path))

    def test_top_level_list(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(SnapshotError):
            load_snapshot(str(path))
