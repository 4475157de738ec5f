"""
Command line for managing price quotes.

Quotes, client addresses and item templates live in JSON slots under the data
directory (``QUOTEBOOK_DATA_DIR``). Quotes can be printed as text or exported
as ``Nabidka-<number>.pdf``; AI suggestions require ``OPENAI_API_KEY``.
"""
from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from quotebook.config import Settings
from quotebook.documents import ExportOptions, PDFGenerationError, QuoteExporter, build_preview, render_text
from quotebook.logging_config import setup_logging
from quotebook.quotes.editing import (
    add_line_item,
    add_template_item,
    apply_client_address,
    remove_line_item,
    remove_logo,
    set_logo,
    update_line_item,
)
from quotebook.quotes.formatting import format_currency, format_date
from quotebook.quotes.listing import QuoteFilters, overview
from quotebook.quotes.numbering import next_quote_number
from quotebook.quotes.validation import (
    ADDRESS_FIELDS,
    ValidationError,
    validate_client_address,
    validate_item_template,
)
from quotebook.session import Session
from quotebook.store import (
    ClientAddress,
    Draft,
    EntityNotFoundError,
    EntityStore,
    JsonFileStorage,
    LineItem,
    Persisted,
    Quote,
    QuoteItemTemplate,
)
from quotebook.suggestions import TextSuggester


# ------------------------ Wiring ------------------------ #


def open_store(settings: Settings) -> EntityStore:
    return EntityStore(JsonFileStorage(settings.data_dir)).init()


def build_exporter(settings: Settings, output_dir: Optional[Path] = None) -> QuoteExporter:
    return QuoteExporter(
        output_dir=output_dir or settings.output_dir,
        options=ExportOptions(font_path=settings.font_path),
        settle_delay=settings.settle_delay,
    )


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


# ------------------------ Quotes ------------------------ #


def cmd_list(args: argparse.Namespace, store: EntityStore, settings: Settings) -> None:
    filters = QuoteFilters(quote_number=args.number or "", client_name=args.client or "", date=args.date)
    summaries = overview(store.quotes.list(), filters)
    if args.as_json:
        _print_json([dataclasses.asdict(summary) for summary in summaries])
        return
    if not summaries:
        print("No quotes match." if store.quotes.list() else "No quotes yet.")
        return
    for summary in summaries:
        print(
            f"{summary.id:<28} {summary.quote_number:<8} {format_date(summary.date):<14} "
            f"{summary.client[:30]:<30} {format_currency(summary.total):>16}"
        )


def cmd_show(args: argparse.Namespace, store: EntityStore, settings: Settings) -> None:
    record = store.quotes.get(args.quote_id)
    preview = build_preview(record.entity)
    print(render_text(preview))
    if args.pdf:
        result = asyncio.run(build_exporter(settings, args.output_dir).export_preview(preview))
        print(f"Saved {result.path} ({result.size} bytes)")


def cmd_export(args: argparse.Namespace, store: EntityStore, settings: Settings) -> None:
    record = store.quotes.get(args.quote_id)
    exporter = build_exporter(settings, args.output_dir)
    result = asyncio.run(exporter.export_quote(record.entity))
    print(f"Saved {result.path} ({result.size} bytes)")


QUOTE_FIELDS = (
    "quote_number",
    "date",
    "from_name",
    "from_address",
    "to_name",
    "to_address",
    "tax_rate",
    "notes",
    "terms",
)
LINE_FIELDS = ("description", "quantity", "unit_price")


def _number(value: str, what: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise SystemExit(f"{what} must be a number, got {value!r}") from exc


def _line_index(quote: Quote, position: Union[int, str]) -> int:
    try:
        position = int(position)
    except ValueError as exc:
        raise SystemExit(f"Line position must be a whole number, got {position!r}") from exc
    if not 1 <= position <= len(quote.line_items):
        raise SystemExit(f"Quote {quote.quote_number} has no line {position}")
    return position - 1


def _apply_quote_args(quote: Quote, args: argparse.Namespace, store: EntityStore) -> Quote:
    """Apply the editing flags shared by new-quote and edit-quote."""
    if args.client:
        quote = apply_client_address(quote, store.client_addresses.get(args.client).entity)

    changes: Dict[str, Any] = {}
    for field_name in QUOTE_FIELDS:
        value = getattr(args, field_name)
        if value is not None:
            changes[field_name] = value
    quote = dataclasses.replace(quote, **changes)

    for position, field_name, value in args.update_line or []:
        if field_name not in LINE_FIELDS:
            raise SystemExit(f"Unknown line field {field_name!r}, expected one of: {', '.join(LINE_FIELDS)}")
        if field_name != "description":
            value = _number(value, field_name)
        quote = update_line_item(quote, _line_index(quote, position), **{field_name: value})
    # Highest position first so earlier removals do not shift later ones.
    for index in sorted({_line_index(quote, position) for position in args.remove_line or []}, reverse=True):
        quote = remove_line_item(quote, index)
    for description, quantity, unit_price in args.add_line or []:
        item = LineItem(
            id=store.id_generator.new_id(),
            description=description,
            quantity=_number(quantity, "quantity"),
            unit_price=_number(unit_price, "unit_price"),
        )
        quote = add_line_item(quote, item)
    for template_id in args.item or []:
        quote = add_template_item(quote, store.quote_item_templates.get(template_id).entity, store.id_generator.new_id)

    if args.no_logo:
        quote = remove_logo(quote)
    elif args.logo:
        try:
            quote = set_logo(quote, args.logo)
        except (OSError, ValueError) as exc:
            raise SystemExit(f"Cannot use logo: {exc}") from exc
    return quote


def cmd_new_quote(args: argparse.Namespace, store: EntityStore, settings: Settings) -> None:
    session = Session()
    session.open_new_quote()
    quote = session.editing_quote(store).entity
    if args.item or args.add_line:
        # Start from the given items instead of the blank default row.
        quote = remove_line_item(quote, 0)
    quote = _apply_quote_args(quote, args, store)

    saved = session.save_quote(store, Draft(quote))
    print(f"Created quote {saved.entity.quote_number} ({saved.id})")


def cmd_edit_quote(args: argparse.Namespace, store: EntityStore, settings: Settings) -> None:
    store.quotes.get(args.quote_id)
    session = Session()
    session.open_quote(args.quote_id)
    record = session.editing_quote(store)
    quote = _apply_quote_args(record.entity, args, store)

    saved = session.save_quote(store, Persisted(id=args.quote_id, entity=quote))
    print(f"Updated quote {saved.entity.quote_number} ({saved.id})")


def cmd_delete_quote(args: argparse.Namespace, store: EntityStore, settings: Settings) -> None:
    removed = store.quotes.delete(args.quote_id)
    print("Deleted." if removed else "Nothing to delete.")


def cmd_next_number(args: argparse.Namespace, store: EntityStore, settings: Settings) -> None:
    print(next_quote_number(record.entity.quote_number for record in store.quotes.list()))


# ------------------------ Address book & templates ------------------------ #


def cmd_addresses(args: argparse.Namespace, store: EntityStore, settings: Settings) -> None:
    for record in store.client_addresses.list():
        address = record.entity
        print(f"{record.id:<28} {address.name:<30} {address.street} {address.house_number}, {address.city}")


def cmd_add_address(args: argparse.Namespace, store: EntityStore, settings: Settings) -> None:
    address = ClientAddress(
        name=args.name,
        street=args.street,
        house_number=args.house_number,
        city=args.city,
        postal_code=args.postal_code,
        country=args.country,
    )
    saved = store.client_addresses.save(Draft(validate_client_address(address)))
    print(f"Saved address {saved.id}")


def cmd_edit_address(args: argparse.Namespace, store: EntityStore, settings: Settings) -> None:
    record = store.client_addresses.get(args.address_id)
    changes = {name: getattr(args, name) for name in ADDRESS_FIELDS if getattr(args, name) is not None}
    address = validate_client_address(dataclasses.replace(record.entity, **changes))
    store.client_addresses.save(Persisted(id=record.id, entity=address))
    print(f"Updated address {record.id}")


def cmd_delete_address(args: argparse.Namespace, store: EntityStore, settings: Settings) -> None:
    removed = store.client_addresses.delete(args.address_id)
    print("Deleted." if removed else "Nothing to delete.")


def cmd_templates(args: argparse.Namespace, store: EntityStore, settings: Settings) -> None:
    for record in store.quote_item_templates.list():
        template = record.entity
        print(f"{record.id:<28} {template.description[:40]:<40} {format_currency(template.unit_price):>16}")


def cmd_add_template(args: argparse.Namespace, store: EntityStore, settings: Settings) -> None:
    template = QuoteItemTemplate(description=args.description, unit_price=args.unit_price)
    saved = store.quote_item_templates.save(Draft(validate_item_template(template)))
    print(f"Saved item template {saved.id}")


def cmd_edit_template(args: argparse.Namespace, store: EntityStore, settings: Settings) -> None:
    record = store.quote_item_templates.get(args.template_id)
    changes: Dict[str, Any] = {}
    if args.description is not None:
        changes["description"] = args.description
    if args.unit_price is not None:
        changes["unit_price"] = args.unit_price
    template = validate_item_template(dataclasses.replace(record.entity, **changes))
    store.quote_item_templates.save(Persisted(id=record.id, entity=template))
    print(f"Updated item template {record.id}")


def cmd_delete_template(args: argparse.Namespace, store: EntityStore, settings: Settings) -> None:
    removed = store.quote_item_templates.delete(args.template_id)
    print("Deleted." if removed else "Nothing to delete.")


# ------------------------ AI suggestions ------------------------ #


def _suggester(settings: Settings) -> TextSuggester:
    return TextSuggester(api_key=settings.openai_api_key or "", model=settings.suggest_model)


def cmd_suggest_description(args: argparse.Namespace, store: EntityStore, settings: Settings) -> None:
    print(asyncio.run(_suggester(settings).suggest_description(args.text)).text)


def cmd_suggest_terms(args: argparse.Namespace, store: EntityStore, settings: Settings) -> None:
    print(asyncio.run(_suggester(settings).suggest_terms()).text)


# ------------------------ Driver ------------------------ #


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from exc


def _add_quote_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument("--client", help="Client address id to copy into the quote")
    p.add_argument("--item", "--add-item", dest="item", action="append", help="Item template id to add (repeatable)")
    p.add_argument(
        "--add-line",
        nargs=3,
        action="append",
        metavar=("DESCRIPTION", "QUANTITY", "UNIT_PRICE"),
        help="Append a line item (repeatable)",
    )
    p.add_argument(
        "--update-line",
        nargs=3,
        action="append",
        metavar=("LINE", "FIELD", "VALUE"),
        help=f"Change one field of line LINE (1-based); FIELD is one of {', '.join(LINE_FIELDS)}",
    )
    p.add_argument("--remove-line", type=int, action="append", metavar="LINE", help="Remove line LINE (1-based)")
    p.add_argument("--number", dest="quote_number")
    p.add_argument("--date", type=_iso_date, help="Issue date (YYYY-MM-DD)")
    p.add_argument("--from-name")
    p.add_argument("--from-address")
    p.add_argument("--to-name")
    p.add_argument("--to-address")
    p.add_argument("--tax-rate", type=float)
    p.add_argument("--notes")
    p.add_argument("--terms")
    logo = p.add_mutually_exclusive_group()
    logo.add_argument("--logo", type=Path, help="Image file embedded as the quote logo")
    logo.add_argument("--no-logo", action="store_true", help="Remove the embedded logo")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage price quotes and export them as PDF.")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("list", help="List quotes, newest first")
    p.add_argument("--number", help="Filter by quote number substring")
    p.add_argument("--client", help="Filter by client name substring")
    p.add_argument("--date", type=_iso_date, help="Filter by issue date (YYYY-MM-DD)")
    p.add_argument("--json", dest="as_json", action="store_true", help="Output JSON instead of a table")
    p.set_defaults(handler=cmd_list)

    p = sub.add_parser("show", help="Print a quote as text")
    p.add_argument("quote_id")
    p.add_argument("--pdf", action="store_true", help="Also save the printed preview as PDF")
    p.add_argument("--output-dir", type=Path, help="Directory for the PDF (default: QUOTEBOOK_OUTPUT_DIR)")
    p.set_defaults(handler=cmd_show)

    p = sub.add_parser("export", help="Export a quote to PDF")
    p.add_argument("quote_id")
    p.add_argument("--output-dir", type=Path, help="Directory for the PDF (default: QUOTEBOOK_OUTPUT_DIR)")
    p.set_defaults(handler=cmd_export)

    p = sub.add_parser("new-quote", help="Create a quote from the defaults")
    _add_quote_arguments(p)
    p.set_defaults(handler=cmd_new_quote)

    p = sub.add_parser("edit-quote", help="Change a saved quote")
    p.add_argument("quote_id")
    _add_quote_arguments(p)
    p.set_defaults(handler=cmd_edit_quote)

    p = sub.add_parser("delete-quote", help="Delete a quote")
    p.add_argument("quote_id")
    p.set_defaults(handler=cmd_delete_quote)

    p = sub.add_parser("next-number", help="Print the next proposed quote number")
    p.set_defaults(handler=cmd_next_number)

    p = sub.add_parser("addresses", help="List saved client addresses")
    p.set_defaults(handler=cmd_addresses)

    p = sub.add_parser("add-address", help="Save a client address")
    for flag in ("--name", "--street", "--house-number", "--city", "--postal-code", "--country"):
        p.add_argument(flag, required=True)
    p.set_defaults(handler=cmd_add_address)

    p = sub.add_parser("edit-address", help="Change a saved client address")
    p.add_argument("address_id")
    for flag in ("--name", "--street", "--house-number", "--city", "--postal-code", "--country"):
        p.add_argument(flag)
    p.set_defaults(handler=cmd_edit_address)

    p = sub.add_parser("delete-address", help="Delete a client address")
    p.add_argument("address_id")
    p.set_defaults(handler=cmd_delete_address)

    p = sub.add_parser("templates", help="List saved item templates")
    p.set_defaults(handler=cmd_templates)

    p = sub.add_parser("add-template", help="Save an item template")
    p.add_argument("--description", required=True)
    p.add_argument("--unit-price", type=float, required=True)
    p.set_defaults(handler=cmd_add_template)

    p = sub.add_parser("edit-template", help="Change a saved item template")
    p.add_argument("template_id")
    p.add_argument("--description")
    p.add_argument("--unit-price", type=float)
    p.set_defaults(handler=cmd_edit_template)

    p = sub.add_parser("delete-template", help="Delete an item template")
    p.add_argument("template_id")
    p.set_defaults(handler=cmd_delete_template)

    p = sub.add_parser("suggest-description", help="Let the AI expand a line-item description")
    p.add_argument("text")
    p.set_defaults(handler=cmd_suggest_description)

    p = sub.add_parser("suggest-terms", help="Let the AI draft business terms")
    p.set_defaults(handler=cmd_suggest_terms)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    store = open_store(settings)

    try:
        args.handler(args, store, settings)
    except PDFGenerationError as exc:
        raise SystemExit(exc.user_message) from exc
    except ValidationError as exc:
        problems: List[str] = exc.problems
        raise SystemExit("Invalid input:\n" + "\n".join(f"- {problem}" for problem in problems)) from exc
    except EntityNotFoundError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
