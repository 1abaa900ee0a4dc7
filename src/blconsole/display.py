"""Render query results as tables, with optional Rich support.

This module intentionally avoids module-level imports of Rich so that
the library keeps working when it is not installed; rendering then
falls back to plain text on stderr.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable, Mapping
from typing import Any

from blconsole.core.models import ArrayValue, PropertyValue, ReplyStatus
from blconsole.exceptions import EnvironmentError


def _load_rich() -> tuple[type[Any], type[Any]]:
	"""Return ``(Console, Table)`` from Rich or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
		from rich.table import Table
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console, Table


def format_value(value: PropertyValue) -> str:
	"""Return a one-cell text form of *value* (arrays one item per line)."""
	if isinstance(value, ArrayValue):
		return "\n".join(f"[{index}] {item}" for index, item in enumerate(value))
	return value.value


def status_note(status: ReplyStatus) -> str | None:
	"""Return a warning for replies that never arrived, else ``None``."""
	if status is ReplyStatus.UNREACHABLE:
		return "The game did not answer; is it running with the command injector?"
	if status is ReplyStatus.EXHAUSTED:
		return "The pipe kept failing; the reply is incomplete."
	return None


def build_rows(results: Iterable[Any] | Mapping[Any, PropertyValue]) -> list[tuple[str, str]]:
	"""Flatten a listing or a mapping into printable rows."""
	if isinstance(results, Mapping):
		return [(str(key), format_value(value)) for key, value in results.items()]
	return [(obj.class_name, obj.name) for obj in results]


def _headers(results: object) -> tuple[str, str]:
	if isinstance(results, Mapping):
		return ("Key", "Value")
	return ("Class", "Name")


def _print_plain_table(title: str, headers: tuple[str, str], rows: list[tuple[str, str]]) -> None:
	"""Render a table without Rich."""
	width = max([len(headers[0]), *(len(row[0]) for row in rows)])
	print(f"\n{title}", file=sys.stderr)
	print("=" * (width + 24), file=sys.stderr)
	print(f"{headers[0]:<{width}}  {headers[1]}", file=sys.stderr)
	print("-" * (width + 24), file=sys.stderr)
	for key, value in rows:
		lines = value.split("\n")
		print(f"{key:<{width}}  {lines[0]}", file=sys.stderr)
		for extra in lines[1:]:
			print(f"{'':<{width}}  {extra}", file=sys.stderr)
	print(file=sys.stderr)


def render(results: Any, *, title: str = "bl-console") -> None:
	"""Print an ``ObjectListing``, ``PropertyListing`` or ``PropertyDump``.

	Uses a Rich table when Rich is available, else a plain-text table on
	stderr.  A note is added when the reply never arrived.
	"""
	headers = _headers(results)
	rows = build_rows(results)
	note = status_note(getattr(results, "status", ReplyStatus.DELIVERED))

	try:
		console_class, table_class = _load_rich()
	except EnvironmentError:
		_print_plain_table(title, headers, rows)
		if note:
			print(note, file=sys.stderr)
		return

	table = table_class(
		title=title,
		show_header=True,
		header_style="bold cyan",
		border_style="dim",
	)
	table.add_column(headers[0], style="bold", min_width=12)
	table.add_column(headers[1], min_width=20)
	from rich.markup import escape

	for row in rows:
		table.add_row(*(escape(cell) for cell in row))

	console = console_class(stderr=True)
	console.print()
	console.print(table)
	if note:
		console.print(f"[yellow]{note}[/yellow]")
	console.print()
