"""CLI commands for sales reporting."""

from __future__ import annotations

from datetime import date, datetime

import click

from storefront.application.sales_report import SalesReportHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Services


@click.command("sales")
@click.option("--start", type=click.DateTime(formats=["%Y-%m-%d"]), default=None, help="First day (default: first of this month).")
@click.option("--end", type=click.DateTime(formats=["%Y-%m-%d"]), default=None, help="Last day (default: today).")
@click.pass_obj
def report_sales(services: Services, start: datetime | None, end: datetime | None) -> None:
    """Summarise sales for a date range (cancelled orders excluded)."""
    today = date.today()
    start_day = start.date() if start else today.replace(day=1)
    end_day = end.date() if end else today

    handler = SalesReportHandler(order_repo=services.order_repo)

    try:
        report = handler.handle(start_day, end_day)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sales {report.start} .. {report.end}")
    click.echo(f"Orders:      {report.order_count}")
    click.echo(f"Total sales: {report.total_sales}")
    if report.count_by_status:
        click.echo()
        click.echo(f"  {'Status':<12} {'Orders':>7} {'Amount':>12}")
        click.echo(f"  {'-'*33}")
        for status, count in sorted(report.count_by_status.items()):
            click.echo(f"  {status:<12} {count:>7} {report.amount_by_status[status]:>12}")
