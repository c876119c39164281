from dataclasses import asdict, dataclass, field
from typing import Mapping, Tuple

import pandas as pd

from inkloop.errors import SnapshotError

MONTH_RECORD_COLUMNS = ["month", "revenue", "expenses", "profit"]
CLIENT_TYPE_COLUMNS = ["name", "value"]
PROJECT_MONTH_COLUMNS = ["month", "completed", "started"]
PARTNER_COLUMNS = ["name", "hours", "revenue"]


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _get(payload: Mapping, name: str, path: str):
    """Fetch ``name`` from a payload keyed in either snake_case or camelCase."""
    if not isinstance(payload, Mapping):
        raise SnapshotError(f"{path}: expected a mapping, got {type(payload).__name__}")
    for key in (name, _camel(name)):
        if key in payload:
            return payload[key]
    raise SnapshotError(f"{path}.{_camel(name)} is missing")


def _records(payload: Mapping, name: str, path: str, factory) -> tuple:
    items = _get(payload, name, path)
    if isinstance(items, (str, bytes)) or not hasattr(items, "__iter__"):
        raise SnapshotError(f"{path}.{_camel(name)}: expected a list")
    return tuple(factory(item, f"{path}.{_camel(name)}[{idx}]") for idx, item in enumerate(items))


@dataclass(frozen=True)
class MonthRecord:
    month: str
    revenue: float
    expenses: float
    profit: float

    @property
    def recomputed_profit(self) -> float:
        return self.revenue - self.expenses

    @classmethod
    def from_dict(cls, payload: Mapping, path: str = "monthRecord") -> "MonthRecord":
        return cls(*(_get(payload, name, path) for name in MONTH_RECORD_COLUMNS))


@dataclass(frozen=True)
class ClientTypeCount:
    name: str
    value: int

    @classmethod
    def from_dict(cls, payload: Mapping, path: str = "clientType") -> "ClientTypeCount":
        return cls(*(_get(payload, name, path) for name in CLIENT_TYPE_COLUMNS))


@dataclass(frozen=True)
class ProjectMonth:
    month: str
    completed: int
    started: int

    @classmethod
    def from_dict(cls, payload: Mapping, path: str = "projectMonth") -> "ProjectMonth":
        return cls(*(_get(payload, name, path) for name in PROJECT_MONTH_COLUMNS))


@dataclass(frozen=True)
class PartnerRecord:
    name: str
    hours: float
    revenue: float

    @classmethod
    def from_dict(cls, payload: Mapping, path: str = "partner") -> "PartnerRecord":
        return cls(*(_get(payload, name, path) for name in PARTNER_COLUMNS))


@dataclass(frozen=True)
class FinancialSnapshot:
    monthly_revenue: Tuple[MonthRecord, ...]
    total_revenue: float
    total_expenses: float
    net_profit: float
    profit_margin: float

    @classmethod
    def from_dict(cls, payload: Mapping, path: str = "financialData") -> "FinancialSnapshot":
        return cls(
            monthly_revenue=_records(payload, "monthly_revenue", path, MonthRecord.from_dict),
            total_revenue=_get(payload, "total_revenue", path),
            total_expenses=_get(payload, "total_expenses", path),
            net_profit=_get(payload, "net_profit", path),
            profit_margin=_get(payload, "profit_margin", path),
        )

    def to_frame(self) -> pd.DataFrame:
        rows = [[getattr(r, col) for col in MONTH_RECORD_COLUMNS] for r in self.monthly_revenue]
        return pd.DataFrame(rows, columns=MONTH_RECORD_COLUMNS)


@dataclass(frozen=True)
class ClientSnapshot:
    total_clients: int
    active_clients: int
    new_this_month: int
    retention_rate: float
    clients_by_type: Tuple[ClientTypeCount, ...]

    @classmethod
    def from_dict(cls, payload: Mapping, path: str = "clientData") -> "ClientSnapshot":
        return cls(
            total_clients=_get(payload, "total_clients", path),
            active_clients=_get(payload, "active_clients", path),
            new_this_month=_get(payload, "new_this_month", path),
            retention_rate=_get(payload, "retention_rate", path),
            clients_by_type=_records(payload, "clients_by_type", path, ClientTypeCount.from_dict),
        )

    def to_frame(self) -> pd.DataFrame:
        rows = [[c.name, c.value] for c in self.clients_by_type]
        return pd.DataFrame(rows, columns=CLIENT_TYPE_COLUMNS)


@dataclass(frozen=True)
class ProjectSnapshot:
    total_projects: int
    completed: int
    in_progress: int
    avg_project_value: float
    completion_rate: float
    projects_by_month: Tuple[ProjectMonth, ...]

    @classmethod
    def from_dict(cls, payload: Mapping, path: str = "projectData") -> "ProjectSnapshot":
        return cls(
            total_projects=_get(payload, "total_projects", path),
            completed=_get(payload, "completed", path),
            in_progress=_get(payload, "in_progress", path),
            avg_project_value=_get(payload, "avg_project_value", path),
            completion_rate=_get(payload, "completion_rate", path),
            projects_by_month=_records(payload, "projects_by_month", path, ProjectMonth.from_dict),
        )

    def to_frame(self) -> pd.DataFrame:
        rows = [[getattr(p, col) for col in PROJECT_MONTH_COLUMNS] for p in self.projects_by_month]
        return pd.DataFrame(rows, columns=PROJECT_MONTH_COLUMNS)


@dataclass(frozen=True)
class TeamSnapshot:
    total_hours: float
    billable_hours: float
    utilization_rate: float
    partner_contribution: Tuple[PartnerRecord, ...]

    @classmethod
    def from_dict(cls, payload: Mapping, path: str = "teamData") -> "TeamSnapshot":
        return cls(
            total_hours=_get(payload, "total_hours", path),
            billable_hours=_get(payload, "billable_hours", path),
            utilization_rate=_get(payload, "utilization_rate", path),
            partner_contribution=_records(payload, "partner_contribution", path, PartnerRecord.from_dict),
        )

    def to_frame(self) -> pd.DataFrame:
        rows = [[getattr(p, col) for col in PARTNER_COLUMNS] for p in self.partner_contribution]
        return pd.DataFrame(rows, columns=PARTNER_COLUMNS)


@dataclass(frozen=True)
class DashboardSnapshot:
    """Immutable bundle of everything the dashboard renders for one session."""

    financial: FinancialSnapshot
    clients: ClientSnapshot
    projects: ProjectSnapshot
    team: TeamSnapshot
    source: str = field(default="input", compare=False)

    @classmethod
    def from_dict(cls, payload: Mapping, source: str = "input") -> "DashboardSnapshot":
        return cls(
            financial=FinancialSnapshot.from_dict(_get(payload, "financial_data", "snapshot")),
            clients=ClientSnapshot.from_dict(_get(payload, "client_data", "snapshot")),
            projects=ProjectSnapshot.from_dict(_get(payload, "project_data", "snapshot")),
            team=TeamSnapshot.from_dict(_get(payload, "team_data", "snapshot")),
            source=source,
        )

    def to_dict(self) -> dict:
        return {
            "financialData": {
                "monthlyRevenue": [asdict(r) for r in self.financial.monthly_revenue],
                "totalRevenue": self.financial.total_revenue,
                "totalExpenses": self.financial.total_expenses,
                "netProfit": self.financial.net_profit,
                "profitMargin": self.financial.profit_margin,
            },
            "clientData": {
                "totalClients": self.clients.total_clients,
                "activeClients": self.clients.active_clients,
                "newThisMonth": self.clients.new_this_month,
                "retentionRate": self.clients.retention_rate,
                "clientsByType": [asdict(c) for c in self.clients.clients_by_type],
            },
            "projectData": {
                "totalProjects": self.projects.total_projects,
                "completed": self.projects.completed,
                "inProgress": self.projects.in_progress,
                "avgProjectValue": self.projects.avg_project_value,
                "completionRate": self.projects.completion_rate,
                "projectsByMonth": [asdict(p) for p in self.projects.projects_by_month],
            },
            "teamData": {
                "totalHours": self.team.total_hours,
                "billableHours": self.team.billable_hours,
                "utilizationRate": self.team.utilization_rate,
                "partnerContribution": [asdict(p) for p in self.team.partner_contribution],
            },
        }
