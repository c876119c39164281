from inkloop.models import (
    ClientSnapshot,
    ClientTypeCount,
    DashboardSnapshot,
    FinancialSnapshot,
    MonthRecord,
    PartnerRecord,
    ProjectMonth,
    ProjectSnapshot,
    TeamSnapshot,
)

# Substituted whenever the host application supplies no snapshot.
DEFAULT_SNAPSHOT = DashboardSnapshot(
    financial=FinancialSnapshot(
        monthly_revenue=(
            MonthRecord("Jan", 45000, 28000, 17000),
            MonthRecord("Feb", 52000, 30000, 22000),
            MonthRecord("Mar", 48000, 29000, 19000),
            MonthRecord("Apr", 61000, 32000, 29000),
            MonthRecord("May", 58000, 31000, 27000),
            MonthRecord("Jun", 67000, 33000, 34000),
        ),
        total_revenue=331000,
        total_expenses=183000,
        net_profit=148000,
        profit_margin=44.7,
    ),
    clients=ClientSnapshot(
        total_clients=24,
        active_clients=18,
        new_this_month=4,
        retention_rate=85,
        clients_by_type=(
            ClientTypeCount("Branding", 8),
            ClientTypeCount("Social Media", 6),
            ClientTypeCount("Full Service", 10),
        ),
    ),
    projects=ProjectSnapshot(
        total_projects=42,
        completed=38,
        in_progress=4,
        avg_project_value=7881,
        completion_rate=90.5,
        projects_by_month=(
            ProjectMonth("Jan", 5, 6),
            ProjectMonth("Feb", 7, 5),
            ProjectMonth("Mar", 6, 7),
            ProjectMonth("Apr", 8, 6),
            ProjectMonth("May", 6, 8),
            ProjectMonth("Jun", 6, 10),
        ),
    ),
    team=TeamSnapshot(
        total_hours=856,
        billable_hours=684,
        utilization_rate=79.9,
        partner_contribution=(
            PartnerRecord("Shanil", 214, 89000),
            PartnerRecord("Sharin", 228, 95000),
            PartnerRecord("Sabah", 198, 78000),
            PartnerRecord("Thasni", 216, 69000),
        ),
    ),
    source="sample",
)
