# ledgerlite/cli.py
import functools
import logging
import os
import sqlite3
from datetime import date
from decimal import Decimal, InvalidOperation

import click
from dotenv import load_dotenv

from ledgerlite.config import load_config, storage_config
from ledgerlite.core.errors import LedgerLiteError
from ledgerlite.core.models import Transaction, TransactionType
from ledgerlite.manual import load_manual_transactions
from ledgerlite.outputs import get_output
from ledgerlite.reports import generate_monthly_report
from ledgerlite.service import TransactionService, validate_transaction
from ledgerlite.stores import get_store

LOG_LEVEL_ENV_VAR = "LEDGERLITE_LOG_LEVEL"
_TYPE_CHOICES = click.Choice(['income', 'expense'], case_sensitive=False)
_DATE = click.DateTime(formats=['%Y-%m-%d'])


def _parse_amount(ctx, param, value):
    if value is None:
        return None
    try:
        amount = Decimal(value.strip())
    except InvalidOperation:
        raise click.BadParameter(f"'{value}' is not a number") from None
    if not amount.is_finite() or amount <= 0:
        raise click.BadParameter("amount must be greater than zero")
    return amount


def _reports_errors(func):
    """Turn ledgerlite errors into a clean CLI failure."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except LedgerLiteError as e:
            raise click.ClickException(str(e)) from e
        except (OSError, sqlite3.Error) as e:
            raise click.ClickException(f"Storage error: {e}") from e
    return wrapper


class LedgerContext:
    """Holds the loaded config and opens the store on first use."""

    def __init__(self, config, click_ctx):
        self.config = config
        self._click_ctx = click_ctx
        self._service = None

    @property
    def service(self):
        if self._service is None:
            storage_config(self.config).ensure_directories()
            store = get_store(self.config['storage'], self.config)
            if hasattr(store, 'close'):
                self._click_ctx.call_on_close(store.close)
            self._service = TransactionService(store)
        return self._service


def _short_id(tx):
    return str(tx.id)[:8]


def _money(amount):
    return f"{amount:,.2f}"


@click.group()
@click.option(
    '--config', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Path to a YAML config file'
)
@click.option(
    '--env-file', 'env_file',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Optional .env file (e.g. LEDGERLITE_STORAGE, LEDGERLITE_LOG_LEVEL)'
)
@click.option(
    '--storage',
    default=None,
    type=click.Choice(['json', 'sqlite']),
    help='Storage backend (overrides config and LEDGERLITE_STORAGE)'
)
@click.option('--data-dir', default=None, type=click.Path(file_okay=False),
              help='Directory holding the transaction data')
@click.option('--export-dir', default=None, type=click.Path(file_okay=False),
              help='Directory report exports are written to')
@click.option('--log-level', default=None, help='Logging level (default: WARNING)')
@click.pass_context
def main(ctx, config_path, env_file, storage, data_dir, export_dir, log_level):
    """LedgerLite: record income and expenses and build monthly reports."""
    if env_file:
        load_dotenv(env_file)

    level_name = (log_level or os.getenv(LOG_LEVEL_ENV_VAR, "WARNING")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = load_config(config_path)
    except LedgerLiteError as e:
        raise click.ClickException(str(e)) from e
    if storage:
        cfg['storage'] = storage
    if data_dir:
        cfg['data_dir'] = data_dir
    if export_dir:
        cfg['export_dir'] = export_dir

    ctx.obj = LedgerContext(cfg, ctx)


@main.command()
@click.option('--type', 'tx_type', required=True, type=_TYPE_CHOICES)
@click.option('--date', 'tx_date', default=None, type=_DATE, help='yyyy-mm-dd (default: today)')
@click.option('--description', required=True)
@click.option('--category', required=True)
@click.option('--amount', required=True, callback=_parse_amount, help='Positive amount')
@click.pass_obj
@_reports_errors
def add(obj, tx_type, tx_date, description, category, amount):
    """Add a transaction."""
    tx = Transaction.new(
        date=tx_date.date() if tx_date else date.today(),
        description=description.strip(),
        category=category.strip(),
        amount=amount,
        type=tx_type,
    )
    obj.service.add_transaction(tx)
    click.echo(f"Transaction {_short_id(tx)} added.")


@main.command(name='list')
@click.option('--limit', default=20, show_default=True, type=click.IntRange(min=1))
@click.pass_obj
@_reports_errors
def list_transactions(obj, limit):
    """List the most recent transactions."""
    recent = obj.service.recent_transactions(limit)
    if not recent:
        click.echo("No transactions found.")
        return

    click.echo(f"| {'ID':<8} | {'Date':<10} | {'Type':<7} | {'Category':<12} | {'Amount':>10} | Description")
    click.echo('-' * 72)
    for tx in recent:
        click.echo(
            f"| {_short_id(tx):<8} | {tx.date.isoformat():<10} | {tx.type.label:<7} "
            f"| {tx.category:<12} | {_money(tx.amount):>10} | {tx.description}"
        )


@main.command()
@click.argument('transaction_id')
@click.option('--type', 'tx_type', default=None, type=_TYPE_CHOICES)
@click.option('--date', 'tx_date', default=None, type=_DATE)
@click.option('--description', default=None)
@click.option('--category', default=None)
@click.option('--amount', default=None, callback=_parse_amount)
@click.pass_obj
@_reports_errors
def edit(obj, transaction_id, tx_type, tx_date, description, category, amount):
    """Replace fields of an existing transaction (by id or 8+ char prefix)."""
    existing = obj.service.find_by_prefix(transaction_id)
    updated = Transaction(
        id=existing.id,
        date=tx_date.date() if tx_date else existing.date,
        description=description.strip() if description is not None else existing.description,
        category=category.strip() if category is not None else existing.category,
        amount=amount if amount is not None else existing.amount,
        type=TransactionType.parse(tx_type) if tx_type else existing.type,
    )
    obj.service.update_transaction(updated)
    click.echo(f"Transaction {_short_id(updated)} updated.")


@main.command()
@click.argument('transaction_id')
@click.option('--yes', is_flag=True, default=False, help='Do not ask for confirmation')
@click.pass_obj
@_reports_errors
def delete(obj, transaction_id, yes):
    """Delete a transaction (by id or 8+ char prefix)."""
    tx = obj.service.find_by_prefix(transaction_id)
    if not yes and not click.confirm(
        f"Delete {tx.date.isoformat()} {tx.description} ({_money(tx.amount)})?"
    ):
        click.echo("Delete canceled.")
        return
    obj.service.delete_transaction(tx.id)
    click.echo(f"Transaction {_short_id(tx)} deleted.")


@main.command()
@click.option('--year', default=None, type=click.IntRange(1900, 2100), help='Default: current year')
@click.option('--month', default=None, type=click.IntRange(1, 12), help='Default: current month')
@click.option('--export', 'export_format', default=None, type=click.Choice(['csv', 'excel']),
              help='Also write the report to the export directory')
@click.pass_obj
@_reports_errors
def report(obj, year, month, export_format):
    """Show the monthly report."""
    today = date.today()
    year = year or today.year
    month = month or today.month

    result = generate_monthly_report(obj.service.store, year, month)

    click.echo(f"Report for {year}-{month:02d}:")
    click.echo(f"Total Income: {_money(result.total_income)}")
    click.echo(f"Total Expense: {_money(result.total_expense)}")
    click.echo(f"Net Balance: {_money(result.net)}")
    click.echo(f"Total Transactions: {result.transaction_count}")
    if result.top_categories:
        click.echo("\nTop Expense Categories:")
        for item in result.top_categories:
            click.echo(f"  {item.category}: {_money(item.amount)}")
    else:
        click.echo("\nNo expense categories.")

    if export_format:
        path = get_output(export_format, obj.config).write(result, year, month)
        click.echo(f"Report exported to {path}")


@main.command(name='import')
@click.argument('manual_file', type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
@_reports_errors
def import_transactions(obj, manual_file):
    """Add every transaction listed in a YAML file."""
    txs = load_manual_transactions(manual_file)
    for tx in txs:
        validate_transaction(tx)
    for tx in txs:
        obj.service.add_transaction(tx)
    click.echo(f"Imported {len(txs)} transaction(s) from {manual_file}.")


if __name__ == '__main__':
    main()
