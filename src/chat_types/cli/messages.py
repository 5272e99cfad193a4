"""CLI: chat-types validate, chat-types sort, chat-types show"""

import json
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from chat_types.errors import ChatTypesError
from chat_types.models.message import sort_messages
from chat_types.transport.json_codec import (
    encode_json_value,
    message_from_json,
    messages_from_json,
    messages_to_json,
)

console = Console()


def _read_records(path: str) -> list:
    from chat_types.cli.main import _read_records
    return _read_records(path)


def _indent(option: Optional[int]) -> int:
    from chat_types.cli.main import _indent
    return _indent(option)


@click.command("validate")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--json-output", "--json", is_flag=True)
def validate_cmd(path, json_output):
    """Check that every record in PATH parses as a message."""
    records = _read_records(path)
    results = []
    for index, raw in enumerate(records):
        try:
            message = message_from_json(raw)
            results.append({"index": index, "id": message.id, "type": message.type.value, "error": None})
        except ChatTypesError as e:
            record_id = raw.get("id") if isinstance(raw, dict) else None
            results.append({"index": index, "id": record_id, "type": None, "error": str(e), "code": e.code})

    failed = [r for r in results if r["error"]]
    if json_output:
        click.echo(json.dumps(results, indent=2))
    else:
        table = Table(title=f"{path} ({len(records)} records)")
        table.add_column("#", justify="right")
        table.add_column("ID", style="bold")
        table.add_column("Type")
        table.add_column("Result")
        for r in results:
            result = f"[red]{r['error']}[/red]" if r["error"] else "[green]ok[/green]"
            table.add_row(str(r["index"]), str(r["id"] or ""), r["type"] or "", result)
        console.print(table)
        if failed:
            console.print(f"[red]{len(failed)} of {len(records)} records failed.[/red]")
        else:
            console.print(f"[green]All {len(records)} records are valid.[/green]")
    if failed:
        raise SystemExit(1)


@click.command("sort")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--skip-invalid", is_flag=True, help="Drop records that fail to parse.")
@click.option("--indent", type=int, default=None)
def sort_cmd(path, skip_invalid, indent):
    """Print the messages in PATH newest first, re-serialized."""
    try:
        messages = messages_from_json(_read_records(path), skip_invalid=skip_invalid)
    except ChatTypesError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)
    payload = messages_to_json(sort_messages(messages))
    click.echo(json.dumps(payload, indent=_indent(indent), default=encode_json_value))


@click.command("show")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def show_cmd(path):
    """Show the messages in PATH as a table, newest first."""
    messages = sort_messages(messages_from_json(_read_records(path), skip_invalid=True))
    table = Table(title=f"Messages ({len(messages)})")
    table.add_column("ID", style="bold")
    table.add_column("Type")
    table.add_column("Author")
    table.add_column("Status")
    table.add_column("Timestamp", justify="right")
    for m in messages:
        table.add_row(
            m.id,
            m.type.value,
            m.author_id,
            m.status.value if m.status else "",
            str(m.timestamp) if m.timestamp is not None else "",
        )
    console.print(table)
