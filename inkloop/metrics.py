import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from inkloop.errors import NOT_COMPUTABLE, DivisionUndefined, InvalidArgument
from inkloop.formatting import format_currency, format_hours, format_percent, round_half_up
from inkloop.models import DashboardSnapshot, MonthRecord, PartnerRecord

logger = logging.getLogger(__name__)

PARTNER_TABLE_FIELDS = ["Partner", "Hours", "Revenue", "AvgRate", "Share"]
MONTHLY_FINANCIAL_FIELDS = ["Month", "Revenue", "Expenses", "Profit", "RecomputedProfit", "ProfitMatches"]
CLIENT_TYPE_FIELDS = ["Category", "Clients", "SharePct"]
PROJECT_TIMELINE_FIELDS = ["Month", "Started", "Completed"]

TABLE_SCHEMAS: Dict[str, List[str]] = {
    "partners": PARTNER_TABLE_FIELDS,
    "monthly_financials": MONTHLY_FINANCIAL_FIELDS,
    "client_types": CLIENT_TYPE_FIELDS,
    "project_timeline": PROJECT_TIMELINE_FIELDS,
}

SHARE_BASES = ("equal", "revenue", "hours")


def _divide(numerator: float, denominator: float, what: str) -> float:
    if denominator == 0:
        raise DivisionUndefined(f"{what}: denominator is zero")
    return numerator / denominator


def compute_or_na(func: Callable, *args, **kwargs):
    """Run a derivation, substituting NOT_COMPUTABLE for a zero denominator."""
    try:
        return func(*args, **kwargs)
    except DivisionUndefined as exc:
        logger.warning("Metric %s not available: %s", getattr(func, "__name__", func), exc)
        return NOT_COMPUTABLE


# --- Financial ---

def average_monthly_revenue(snapshot: DashboardSnapshot) -> float:
    months = len(snapshot.financial.monthly_revenue)
    return _divide(snapshot.financial.total_revenue, months, "average monthly revenue")


def growth_rate(first: float, last: float):
    """Percentage change from ``first`` to ``last``, one decimal."""
    if first == 0:
        return NOT_COMPUTABLE
    return float(round_half_up((last - first) / first * 100, 1))


def series_growth(values: Sequence[float]):
    if len(values) < 2:
        return NOT_COMPUTABLE
    return growth_rate(values[0], values[-1])


def profit_reconciliation(snapshot: DashboardSnapshot) -> List[MonthRecord]:
    """Months whose stored profit differs from revenue - expenses."""
    return [
        record
        for record in snapshot.financial.monthly_revenue
        if not np.isclose(record.profit, record.recomputed_profit)
    ]


# --- Clients ---

def average_client_value(snapshot: DashboardSnapshot):
    if snapshot.clients.total_clients == 0:
        return NOT_COMPUTABLE
    return snapshot.financial.total_revenue / snapshot.clients.total_clients


def client_lifetime_value(snapshot: DashboardSnapshot):
    value = average_client_value(snapshot)
    if value is NOT_COMPUTABLE:
        return NOT_COMPUTABLE
    return value * (snapshot.clients.retention_rate / 100)


def client_growth_rate(snapshot: DashboardSnapshot):
    if snapshot.clients.total_clients == 0:
        return NOT_COMPUTABLE
    rate = snapshot.clients.new_this_month / snapshot.clients.total_clients * 100
    return float(round_half_up(rate, 1))


# --- Team ---

def billable_share(snapshot: DashboardSnapshot):
    if snapshot.team.total_hours == 0:
        return NOT_COMPUTABLE
    return snapshot.team.billable_hours / snapshot.team.total_hours * 100


def partner_average_rate(partner: PartnerRecord) -> float:
    return _divide(partner.revenue, partner.hours, f"average rate for {partner.name}")


def partner_share(snapshot: DashboardSnapshot, basis: str = "equal") -> List[float]:
    """Percentage share per partner, in input order, summing to 100."""
    partners = snapshot.team.partner_contribution
    if basis not in SHARE_BASES:
        raise InvalidArgument(f"Unknown share basis {basis!r}; expected one of {', '.join(SHARE_BASES)}")
    if basis == "equal":
        share = _divide(100, len(partners), "partner share")
        return [share] * len(partners)

    weights = np.array([getattr(p, basis) for p in partners], dtype=float)
    total = weights.sum() if len(weights) else 0.0
    if total == 0:
        raise DivisionUndefined(f"partner share: total {basis} is zero")
    return (weights / total * 100).tolist()


def build_partner_table(snapshot: DashboardSnapshot, basis: str = "equal") -> pd.DataFrame:
    partners = snapshot.team.partner_contribution
    if not partners:
        return pd.DataFrame(columns=PARTNER_TABLE_FIELDS)

    shares = compute_or_na(partner_share, snapshot, basis)
    rows = []
    for idx, partner in enumerate(partners):
        rate = compute_or_na(partner_average_rate, partner)
        rows.append(
            {
                "Partner": partner.name,
                "Hours": partner.hours,
                "Revenue": partner.revenue,
                "AvgRate": _whole(rate),
                "Share": NOT_COMPUTABLE if shares is NOT_COMPUTABLE else float(round_half_up(shares[idx], 1)),
            }
        )
    return pd.DataFrame(rows, columns=PARTNER_TABLE_FIELDS)


# --- Tables ---

def build_monthly_financial_table(snapshot: DashboardSnapshot) -> pd.DataFrame:
    frame = snapshot.financial.to_frame()
    table = pd.DataFrame(
        {
            "Month": frame["month"],
            "Revenue": frame["revenue"],
            "Expenses": frame["expenses"],
            "Profit": frame["profit"],
        }
    )
    table["RecomputedProfit"] = table["Revenue"] - table["Expenses"]
    table["ProfitMatches"] = np.isclose(table["Profit"].astype(float), table["RecomputedProfit"].astype(float))
    return table[MONTHLY_FINANCIAL_FIELDS]


def build_client_type_table(snapshot: DashboardSnapshot) -> pd.DataFrame:
    frame = snapshot.clients.to_frame()
    table = pd.DataFrame({"Category": frame["name"], "Clients": frame["value"]})
    total = table["Clients"].sum()
    if total > 0:
        table["SharePct"] = (table["Clients"] / total * 100).round(1)
    else:
        table["SharePct"] = [NOT_COMPUTABLE] * len(table)
    return table[CLIENT_TYPE_FIELDS]


def build_project_timeline_table(snapshot: DashboardSnapshot) -> pd.DataFrame:
    frame = snapshot.projects.to_frame()
    table = pd.DataFrame({"Month": frame["month"], "Started": frame["started"], "Completed": frame["completed"]})
    return table[PROJECT_TIMELINE_FIELDS]


TABLE_BUILDERS: Dict[str, Callable[[DashboardSnapshot], pd.DataFrame]] = {
    "partners": build_partner_table,
    "monthly_financials": build_monthly_financial_table,
    "client_types": build_client_type_table,
    "project_timeline": build_project_timeline_table,
}


# --- View model ---

def _whole(value):
    if value is NOT_COMPUTABLE:
        return value
    return int(round_half_up(value))


@dataclass(frozen=True)
class Card:
    title: str
    value: object
    subtitle: Optional[str] = None
    trend: object = None


def _cards_overview(snapshot, monthly, projects, range_label):
    revenue = [r.revenue for r in monthly]
    profit = [r.profit for r in monthly]
    started = [p.started for p in projects]
    return [
        Card("Total Revenue", format_currency(sum(revenue)), range_label, series_growth(revenue)),
        Card(
            "Active Clients",
            snapshot.clients.active_clients,
            f"{snapshot.clients.new_this_month} new this month",
            client_growth_rate(snapshot),
        ),
        Card(
            "Projects In Progress",
            snapshot.projects.in_progress,
            f"{snapshot.projects.completed} completed",
            series_growth(started),
        ),
        Card("Profit Margin", format_percent(snapshot.financial.profit_margin), None, series_growth(profit)),
    ]


def _cards_financial(snapshot, monthly):
    avg_monthly = _whole(compute_or_na(average_monthly_revenue, snapshot))
    return [
        Card("Total Revenue", format_currency(snapshot.financial.total_revenue), f"{len(snapshot.financial.monthly_revenue)}-month total"),
        Card(
            "Net Profit",
            format_currency(snapshot.financial.net_profit),
            f"{format_percent(snapshot.financial.profit_margin)} margin",
        ),
        Card("Avg Monthly", format_currency(avg_monthly), "Revenue per month"),
        Card("Revenue In Range", format_currency(sum(r.revenue for r in monthly)), f"{len(monthly)} months shown"),
    ]


def _cards_clients(snapshot):
    growth = client_growth_rate(snapshot)
    return [
        Card("Total Clients", snapshot.clients.total_clients),
        Card("Active Clients", snapshot.clients.active_clients),
        Card("New This Month", snapshot.clients.new_this_month),
        Card("Retention Rate", format_percent(snapshot.clients.retention_rate)),
        Card("Average Client Value", format_currency(_whole(average_client_value(snapshot)))),
        Card("Client Lifetime Value", format_currency(_whole(client_lifetime_value(snapshot)))),
        Card("Growth Rate", growth if growth is NOT_COMPUTABLE else f"+{format_percent(growth)}"),
    ]


def _cards_projects(snapshot):
    return [
        Card("Total Projects", snapshot.projects.total_projects),
        Card("Completed", snapshot.projects.completed, f"{format_percent(snapshot.projects.completion_rate)} rate"),
        Card("In Progress", snapshot.projects.in_progress),
        Card("Avg Project Value", format_currency(snapshot.projects.avg_project_value)),
    ]


def _cards_team(snapshot):
    return [
        Card("Total Hours", format_hours(snapshot.team.total_hours), "Last month"),
        Card(
            "Billable Hours",
            format_hours(snapshot.team.billable_hours),
            f"{format_percent(snapshot.team.utilization_rate)} utilization",
        ),
        Card("Efficiency", format_percent(snapshot.team.utilization_rate), f"{format_percent(billable_share(snapshot))} billable"),
    ]


def derive_view(snapshot: DashboardSnapshot, controller, share_basis: str = "equal") -> dict:
    """Cards and tables for the controller's active view. Recomputed on every call."""
    view = controller.current_view()
    monthly = controller.apply_range(snapshot.financial.monthly_revenue)
    projects = controller.apply_range(snapshot.projects.projects_by_month)

    tables: Dict[str, pd.DataFrame] = {}
    if view == "overview":
        cards = _cards_overview(snapshot, monthly, projects, controller.range_label())
        tables["monthly_financials"] = controller.apply_range(build_monthly_financial_table(snapshot))
        tables["client_types"] = build_client_type_table(snapshot)
    elif view == "financial":
        cards = _cards_financial(snapshot, monthly)
        tables["monthly_financials"] = controller.apply_range(build_monthly_financial_table(snapshot))
    elif view == "clients":
        cards = _cards_clients(snapshot)
        tables["client_types"] = build_client_type_table(snapshot)
    elif view == "projects":
        cards = _cards_projects(snapshot)
        tables["project_timeline"] = controller.apply_range(build_project_timeline_table(snapshot))
    else:
        cards = _cards_team(snapshot)
        tables["partners"] = build_partner_table(snapshot, share_basis)

    return {
        "view": view,
        "range": controller.current_range(),
        "range_label": controller.range_label(),
        "cards": cards,
        "tables": tables,
    }
