"""
chat-types CLI: `chat-types` command.

Commands:
  chat-types validate <file>   Check every record parses
  chat-types sort <file>       Re-serialize newest first
  chat-types show <file>       Table of parsed messages

Input files hold a JSON array of message objects, a single object, or one
object per line.
"""

import json
import logging
from pathlib import Path

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install chat-types[cli]")

console = Console()
CONFIG_FILE = Path.home() / ".chat-types" / "config.json"
DEFAULT_INDENT = 2


def _load_config() -> dict:
    try:
        cfg = json.loads(CONFIG_FILE.read_text())
    except (OSError, json.JSONDecodeError):
        return {}
    return cfg if isinstance(cfg, dict) else {}


def _indent(option) -> int:
    if option is not None:
        return option
    indent = _load_config().get("indent", DEFAULT_INDENT)
    if isinstance(indent, bool) or not isinstance(indent, int):
        console.print(f"[red]Invalid indent in {CONFIG_FILE}: {indent!r}[/red]")
        raise SystemExit(1)
    return indent


def _read_records(path: str) -> list:
    try:
        text = Path(path).read_text()
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Cannot read {path}: {e}[/red]")
        raise SystemExit(1)
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return _read_json_lines(path, text)
    if isinstance(data, list):
        return data
    return [data]


def _read_json_lines(path: str, text: str) -> list:
    records = []
    for number, line in enumerate(text.splitlines(), 1):
        if not line.strip():
            continue
        try:
            records.append(json.loads(line))
        except json.JSONDecodeError as e:
            console.print(f"[red]Invalid JSON on line {number} of {path}: {e.msg}[/red]")
            raise SystemExit(1)
    return records


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Log each parsed record.")
def main(verbose):
    """chat-types CLI: inspect and normalize chat message dumps."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register subcommands from separate modules
from chat_types.cli.messages import validate_cmd, sort_cmd, show_cmd

main.add_command(validate_cmd)
main.add_command(sort_cmd)
main.add_command(show_cmd)


if __name__ == "__main__":
    main()
