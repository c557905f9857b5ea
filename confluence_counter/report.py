"""
Plain-text rendering of an AggregateResult.

Produces the two tables the CLI prints:
  Results Summary   — one row per category with its total
  Per Page Details  — one row per detail record (only when there are any)
"""

import json

from .schemas import UNIT, WDIO, AggregateResult


def format_count(value: float) -> str:
    """Whole counts print without a decimal point ("6", not "6.0")."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


CATEGORY_LABELS = {UNIT: "Unit", WDIO: "WDIO"}


def _category_label(name: str) -> str:
    return CATEGORY_LABELS.get(name, name.title())


def render_table(headers: list[str], rows: list[list[str]]) -> str:
    """Render a simple boxed table with left-aligned columns."""
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def line(cells: list[str]) -> str:
        return "| " + " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(cells)) + " |"

    out = [border, line(headers), border]
    out.extend(line(row) for row in rows)
    out.append(border)
    return "\n".join(out)


def format_results(result: AggregateResult) -> str:
    """Render the summary table and, if any, the per-page table."""
    categories = list(result.totals)
    summary_rows = [
        [_category_label(name), format_count(result.totals[name])]
        for name in categories
    ]
    sections = ["Results Summary:", render_table(["Type", "Count"], summary_rows)]

    if result.page_details:
        headers = ["Page Title"] + [_category_label(name) for name in categories]
        detail_rows = [
            [detail.title] + [format_count(detail.counts.get(name, 0.0)) for name in categories]
            for detail in result.page_details
        ]
        sections.append("")
        sections.append("Per Page Details:")
        sections.append(render_table(headers, detail_rows))

    return "\n".join(sections)


def to_json(result: AggregateResult) -> str:
    """Serialize a result for --json output."""
    payload = result.model_dump()
    payload["total_unit_tests"] = result.total_unit_tests
    payload["total_wdio_tests"] = result.total_wdio_tests
    return json.dumps(payload, indent=2, ensure_ascii=False)
