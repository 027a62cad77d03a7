"""Plain-text rendering of the dashboard for terminal output."""
from typing import Any, Optional

from sales_api.client.dashboard import MONTH_NAMES, DashboardClient

TABLE_COLUMNS = ("id", "Title", "Description", "Price", "Category", "Sold")
MAX_CELL_WIDTH = 40
BAR_WIDTH = 40


def _truncate(text: str, width: int = MAX_CELL_WIDTH) -> str:
    text = " ".join(str(text).split())
    if len(text) <= width:
        return text
    return text[: width - 3] + "..."


def _transaction_row(transaction: dict[str, Any]) -> list[str]:
    return [
        str(transaction.get("id", "")),
        _truncate(transaction.get("title", "")),
        _truncate(transaction.get("description", "")),
        f"${float(transaction.get('price', 0)):.2f}",
        _truncate(transaction.get("category", ""), 20),
        "Yes" if transaction.get("sold") else "No",
    ]


def render_table(transactions: list[dict[str, Any]]) -> str:
    """Render transactions as a fixed-width text table."""
    if not transactions:
        return "No transactions available"

    rows = [list(TABLE_COLUMNS)] + [_transaction_row(t) for t in transactions]
    widths = [max(len(row[i]) for row in rows) for i in range(len(TABLE_COLUMNS))]

    def fmt(row: list[str]) -> str:
        return " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(row))

    lines = [fmt(rows[0]), "-+-".join("-" * w for w in widths)]
    lines.extend(fmt(row) for row in rows[1:])
    return "\n".join(lines)


def render_statistics(statistics: Optional[dict[str, Any]]) -> str:
    if statistics is None:
        return "Loading statistics..."
    return "\n".join([
        f"Total Sale Amount:    ${float(statistics.get('totalSaleAmount', 0)):.2f}",
        f"Total Sold Items:     {statistics.get('soldItems', 0)}",
        f"Total Not Sold Items: {statistics.get('notSoldItems', 0)}",
    ])


def render_bar_chart(bar_chart: list[dict[str, Any]]) -> str:
    """Render price-range counts as horizontal text bars."""
    if not bar_chart:
        return "No chart data"

    max_count = max(int(item.get("count", 0)) for item in bar_chart)
    label_width = max(len(str(item.get("range", ""))) for item in bar_chart)
    lines = []
    for item in bar_chart:
        count = int(item.get("count", 0))
        length = round(count / max_count * BAR_WIDTH) if max_count else 0
        lines.append(f"{str(item.get('range', '')).rjust(label_width)} | {'#' * length} {count}")
    return "\n".join(lines)


def render_dashboard(client: DashboardClient) -> str:
    """Render the full dashboard for the client's current state and data."""
    state = client.state
    previous = "[Previous]" if client.can_go_previous else "[Previous (disabled)]"
    search = f'"{state.search}"' if state.search else "(none)"

    sections = [
        "Transaction Dashboard",
        f"Month: {MONTH_NAMES[state.month - 1]}   Search: {search}",
        "",
        "== Transactions ==",
        render_table(client.transactions),
        f"Page {state.page} ({client.total} matching)   {previous} [Next]",
        "",
        "== Transaction Statistics ==",
        render_statistics(client.statistics),
        "",
        "== Transactions Bar Chart ==",
        render_bar_chart(client.bar_chart),
    ]
    return "\n".join(sections)
