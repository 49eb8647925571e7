#!/usr/bin/env python3
"""
Catalog Price Matcher CLI
Matches a pasted product list against a pasted price sheet and prints a
``lineNumber<TAB>price`` listing ready to paste back into a spreadsheet.
"""

import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from .deductions import apply_deductions, find_deductions
from .engine import PriceMatcher
from .models import MatchReport, format_price
from .rules import DEFAULT_RULES, MatchingRules, RulesError, load_rules

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

END_OF_BLOCK = "."


def _load_rules(rules_file: Optional[str]) -> MatchingRules:
    if not rules_file:
        return DEFAULT_RULES
    try:
        return load_rules(rules_file)
    except RulesError as e:
        click.echo(f"Error loading rules: {e}", err=True)
        raise click.Abort()


def stats_table(report: MatchReport) -> Table:
    """Statistics of one pass as a rich table."""
    table = Table(title="Locked mode" if report.locked else "Plain mode")
    table.add_column("Matched", justify="right", style="green")
    table.add_column("Unmatched", justify="right", style="red")
    table.add_column("Total", justify="right")
    table.add_row(str(report.stats.matched), str(report.stats.unmatched), str(report.stats.total))
    return table


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
def cli(verbose: bool):
    """Match catalog line-items against a price sheet."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command('match')
@click.argument('prices_file', type=click.Path(exists=True, dir_okay=False))
@click.argument('products_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--locked', is_flag=True, help='Apply handling fee and condition deductions')
@click.option('--rules', 'rules_file', type=click.Path(exists=True, dir_okay=False), help='JSON rules overriding the defaults')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Write the result to this file')
@click.option('--json', 'as_json', is_flag=True, help='Emit the full report as JSON')
def match_command(prices_file: str, products_file: str, locked: bool, rules_file: Optional[str],
                  output: Optional[str], as_json: bool):
    """Match PRODUCTS_FILE against PRICES_FILE."""
    matcher = PriceMatcher(_load_rules(rules_file))

    price_text = Path(prices_file).read_text(encoding='utf-8')
    product_text = Path(products_file).read_text(encoding='utf-8')
    report = matcher.match_text(price_text, product_text, locked)

    if as_json:
        result = json.dumps(report.to_dict(), indent=2, ensure_ascii=False)
    else:
        result = report.text

    if output:
        with open(output, 'w', encoding='utf-8') as f:
            f.write(result + "\n")
        logger.info(f"Results saved to: {output}")
    else:
        click.echo(result)

    err_console.print(stats_table(report))


@cli.command('deduct')
@click.argument('price')
@click.argument('remarks', required=False, default="")
@click.option('--rules', 'rules_file', type=click.Path(exists=True, dir_okay=False), help='JSON rules overriding the defaults')
def deduct_command(price: str, remarks: str, rules_file: Optional[str]):
    """Show the locked-mode price of PRICE for the given REMARKS."""
    rules = _load_rules(rules_file)
    try:
        base_price = Decimal(price)
    except InvalidOperation:
        raise click.BadParameter(f"'{price}' is not a number", param_hint='PRICE')

    for keyword, amount in find_deductions(remarks, rules):
        err_console.print(f"[dim]{keyword}: {format_price(amount)}[/dim]")
    click.echo(format_price(apply_deductions(base_price, remarks, rules)))


def read_block(title: str) -> str:
    """Read pasted lines until a line holding only '.' (or end of input)."""
    console.print(f"\n[bold]{title}[/bold] [dim](finish with a line containing only '{END_OF_BLOCK}')[/dim]")
    lines = []
    while True:
        try:
            line = console.input()
        except EOFError:
            break
        if line.strip() == END_OF_BLOCK:
            break
        lines.append(line)
    return "\n".join(lines)


def show_report(report: MatchReport):
    console.print(stats_table(report))
    if report.lines:
        console.print(Panel(Text(report.text), title="Result", border_style="green"))
    else:
        console.print("[yellow]No matches.[/yellow]")


@cli.command('interactive')
@click.option('--rules', 'rules_file', type=click.Path(exists=True, dir_okay=False), help='JSON rules overriding the defaults')
def interactive_command(rules_file: Optional[str]):
    """Paste both blocks and toggle locked mode from a menu."""
    matcher = PriceMatcher(_load_rules(rules_file))

    console.print(Panel.fit(
        "[bold blue]Catalog Price Matcher[/bold blue]\n"
        "[dim]Paste a price sheet and a product list[/dim]",
        border_style="blue"
    ))

    price_text = read_block("Price sheet")
    product_text = read_block("Product list")
    locked = False
    show_report(matcher.match_text(price_text, product_text, locked))

    while True:
        console.print("\n[bold]📋 Main Menu[/bold]")
        console.print(f"1. [cyan]Toggle locked mode[/cyan] - currently {'ON' if locked else 'OFF'}")
        console.print("2. [cyan]Paste price sheet[/cyan]")
        console.print("3. [cyan]Paste product list[/cyan]")
        console.print("4. [cyan]Clear all[/cyan]")
        console.print("5. [cyan]Exit[/cyan]")

        try:
            choice = Prompt.ask("Select an option", choices=["1", "2", "3", "4", "5"], default="5")
        except EOFError:
            break

        if choice == "1":
            locked = not locked
        elif choice == "2":
            price_text = read_block("Price sheet")
        elif choice == "3":
            product_text = read_block("Product list")
        elif choice == "4":
            price_text, product_text, locked = "", "", False
            console.print("[green]All data cleared.[/green]")
            continue
        elif choice == "5":
            console.print("[green]👋 Goodbye![/green]")
            break

        show_report(matcher.match_text(price_text, product_text, locked))


if __name__ == '__main__':
    cli()
