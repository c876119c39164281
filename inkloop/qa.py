import logging
from collections import Counter

import numpy as np

from inkloop.metrics import profit_reconciliation
from inkloop.models import DashboardSnapshot
from inkloop.utils import current_timestamp

logger = logging.getLogger(__name__)


def _duplicates(names) -> list:
    return sorted(name for name, count in Counter(names).items() if count > 1)


def run_qa(snapshot: DashboardSnapshot) -> dict:
    """Data-quality report. Violations become warnings; nothing is corrected."""
    qa = {
        "timestamp": current_timestamp(),
        "source": snapshot.source,
        "checks": {},
        "warnings": [],
    }
    checks = qa["checks"]
    warnings = qa["warnings"]

    fin = snapshot.financial
    mismatched = profit_reconciliation(snapshot)
    checks["profit_reconciliation_pass"] = int(not mismatched)
    checks["profit_mismatch_count"] = len(mismatched)
    for record in mismatched:
        warnings.append(
            f"{record.month}: profit {record.profit} != revenue - expenses ({record.recomputed_profit})"
        )

    monthly_revenue = sum(r.revenue for r in fin.monthly_revenue)
    monthly_expenses = sum(r.expenses for r in fin.monthly_revenue)
    checks["total_revenue_matches_months"] = int(bool(np.isclose(fin.total_revenue, monthly_revenue)))
    checks["total_expenses_matches_months"] = int(bool(np.isclose(fin.total_expenses, monthly_expenses)))
    checks["net_profit_matches_totals"] = int(bool(np.isclose(fin.net_profit, fin.total_revenue - fin.total_expenses)))
    if not checks["total_revenue_matches_months"]:
        warnings.append(f"totalRevenue {fin.total_revenue} != sum of monthly revenue {monthly_revenue}")
    if not checks["total_expenses_matches_months"]:
        warnings.append(f"totalExpenses {fin.total_expenses} != sum of monthly expenses {monthly_expenses}")
    if not checks["net_profit_matches_totals"]:
        warnings.append(f"netProfit {fin.net_profit} != totalRevenue - totalExpenses")

    clients = snapshot.clients
    checks["active_within_total_clients"] = int(0 <= clients.active_clients <= clients.total_clients)
    checks["new_within_total_clients"] = int(0 <= clients.new_this_month <= clients.total_clients)
    if not checks["active_within_total_clients"]:
        warnings.append(f"activeClients {clients.active_clients} outside 0..{clients.total_clients}")
    if not checks["new_within_total_clients"]:
        warnings.append(f"newThisMonth {clients.new_this_month} outside 0..{clients.total_clients}")

    categories = [c.name for c in clients.clients_by_type]
    duplicate_categories = _duplicates(categories)
    checks["client_categories_unique"] = int(not duplicate_categories)
    checks["negative_category_count"] = sum(1 for c in clients.clients_by_type if c.value < 0)
    if duplicate_categories:
        warnings.append(f"Duplicate client categories: {', '.join(duplicate_categories)}")
    if checks["negative_category_count"]:
        warnings.append(f"{checks['negative_category_count']} client categories have negative counts")

    projects = snapshot.projects
    checks["project_counts_within_total"] = int(projects.completed + projects.in_progress <= projects.total_projects)
    if not checks["project_counts_within_total"]:
        warnings.append(
            f"completed + inProgress ({projects.completed + projects.in_progress}) exceeds totalProjects {projects.total_projects}"
        )

    team = snapshot.team
    checks["billable_within_total_hours"] = int(team.billable_hours <= team.total_hours)
    if not checks["billable_within_total_hours"]:
        warnings.append(f"billableHours {team.billable_hours} exceeds totalHours {team.total_hours}")

    partner_names = [p.name for p in team.partner_contribution]
    duplicate_partners = _duplicates(partner_names)
    checks["partner_names_unique"] = int(not duplicate_partners)
    checks["non_positive_partner_hours_count"] = sum(1 for p in team.partner_contribution if p.hours <= 0)
    if duplicate_partners:
        warnings.append(f"Duplicate partner names: {', '.join(duplicate_partners)}")
    if checks["non_positive_partner_hours_count"]:
        warnings.append(f"{checks['non_positive_partner_hours_count']} partners have zero or negative hours")

    for message in warnings:
        logger.warning("QA: %s", message)
    return qa
