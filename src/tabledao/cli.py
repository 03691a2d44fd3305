#!/usr/bin/env python3
"""tabledao CLI for ad hoc table operations."""

import argparse
import logging

import questionary
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from tabledao.config import config
from tabledao.entity import Entity
from tabledao.runner import SqlRunner
from tabledao.template import DaoTemplate

console = Console()


def assignment(pair: str) -> tuple[str, str | None]:
    """Parse a field=value argument. The literal null becomes None."""
    field, sep, value = pair.partition("=")
    if not sep or not field.strip():
        raise argparse.ArgumentTypeError(f"expected field=value, got {pair!r}")
    return field.strip(), None if value == "null" else value


def as_entity(pairs: list[tuple[str, str | None]]) -> Entity:
    return Entity.parse(dict(pairs))


def render(records: list[Entity], title: str) -> None:
    """Print records as a table."""
    if not records:
        console.print("[red]No records found.[/]")
        return
    table = Table(title=title)
    columns = records[0].field_names
    for column in columns:
        table.add_column(column)
    for record in records:
        table.add_row(*(str(record.get(c)) for c in columns))
    console.print(table)


def get_record(dao: DaoTemplate, args) -> None:
    record = dao.get(args.value)
    render([record] if record else [], dao.table_name)


def find_records(dao: DaoTemplate, args) -> None:
    render(dao.find(as_entity(args.where)), dao.table_name)


def count_records(dao: DaoTemplate, args) -> None:
    console.print(dao.count(as_entity(args.where)))


def add_record(dao: DaoTemplate, args) -> None:
    key = dao.add_for_generated_key(as_entity(args.fields))
    console.print(f"[green]Added record to {dao.table_name}.[/]")
    if key is not None:
        console.print(f"{dao.primary_key_field}: {key}")


def update_record(dao: DaoTemplate, args) -> None:
    updated = dao.update(as_entity(args.fields))
    console.print(f"[green]Rows updated: {updated}[/]")


def delete_record(dao: DaoTemplate, args) -> None:
    summary = (
        f"Will delete from [bold]{dao.table_name}[/] where "
        f"{dao.primary_key_field} = {args.value}."
    )
    console.print(f"[yellow]{summary}[/]")

    if not args.yes and not questionary.confirm("Proceed with these changes?").ask():
        console.print("[dim]Cancelled.[/]")
        return

    deleted = dao.delete(args.value)
    console.print(f"[green]Rows deleted: {deleted}[/]")


COMMANDS = {
    "get": get_record,
    "find": find_records,
    "count": count_records,
    "add": add_record,
    "update": update_record,
    "delete": delete_record,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="tabledao CLI")
    parser.add_argument("--database-url", default=None, help="Override DATABASE_URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    def command(name: str, description: str) -> argparse.ArgumentParser:
        sub = subparsers.add_parser(name, help=description)
        sub.add_argument("table", help="Table name")
        sub.add_argument("--pk", default=config.primary_key_field, help="Primary-key field")
        return sub

    command("get", "Get a record by primary key").add_argument("value")
    command("find", "Find records matching field=value conditions").add_argument(
        "where", nargs="*", type=assignment
    )
    command("count", "Count records matching field=value conditions").add_argument(
        "where", nargs="*", type=assignment
    )
    command("add", "Insert a record").add_argument("fields", nargs="+", type=assignment)
    command("update", "Update a record, fields must include the primary key").add_argument(
        "fields", nargs="+", type=assignment
    )
    delete = command("delete", "Delete a record by primary key")
    delete.add_argument("value")
    delete.add_argument("--yes", action="store_true", help="Skip confirmation")

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=config.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    dao = DaoTemplate(args.table, args.pk, SqlRunner(args.database_url))
    COMMANDS[args.command](dao, args)


if __name__ == "__main__":
    main()
