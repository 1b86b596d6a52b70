#!/usr/bin/env python3
"""
Unified CLI for vaccine tracking.

Commands:
  list      - Show vaccinations, most urgent renewals first
  show      - Show one vaccination in detail
  add       - Record a new vaccination
  edit      - Change a recorded vaccination
  delete    - Remove a vaccination and its reminder
  reminders - Show pending renewal reminders, or fire the due ones
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from vaccines import (
    AttentionLevel,
    FileReminders,
    Reminder,
    Vaccine,
    VaccineFilter,
    VaccineForm,
    VaccineStorage,
    VaccineTracker,
    VaccineValidationError,
    count_by_filter,
    parse_date,
)
from vaccines.reminders import default_reminders_path
from vaccines.storage import default_data_path

# =============================================================================
# Formatting helpers
# =============================================================================


def format_date(value: Optional[date]) -> str:
    """Format date for display."""
    return value.isoformat() if value is not None else "-"


def format_days(days: Optional[int]) -> str:
    """Format days until renewal (e.g., '3mo 15d' or '-2mo 5d')."""
    if days is None:
        return "-"

    sign = "-" if days < 0 else ""
    days = abs(days)
    months = days // 30
    remaining_days = days % 30
    if months > 0:
        return f"{sign}{months}mo {remaining_days}d"
    return f"{sign}{days}d"


def attention_marker(level: AttentionLevel) -> str:
    """Short marker for the attention badge column."""
    if level == AttentionLevel.OVERDUE:
        return "!!"
    if level == AttentionLevel.WARNING:
        return "!"
    return ""


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def short_id(vaccine_id: str) -> str:
    return vaccine_id[:8]


# =============================================================================
# List command
# =============================================================================


def make_vaccine_table(vaccines: List[Vaccine], now: date) -> List[List[str]]:
    """Convert vaccines to table rows."""
    rows = []
    for vaccine in vaccines:
        info = vaccine.status_info(now)
        rows.append(
            [
                attention_marker(info.attention),
                short_id(vaccine.id),
                truncate(vaccine.name),
                format_date(vaccine.date),
                info.text,
                format_date(vaccine.renewal_date),
                format_days(info.days_until_renewal),
            ]
        )
    return rows


def cmd_list(args, tracker: VaccineTracker):
    """Show vaccinations, filtered and sorted by urgency."""
    now = args.as_of or date.today()
    mode = VaccineFilter.parse(args.filter)

    all_vaccines = tracker.vaccines()
    counts = count_by_filter(all_vaccines, now)
    vaccines = tracker.visible(mode, now)

    print(f"Vaccinations: {len(all_vaccines)} (as of {now.isoformat()})")
    print(
        "  ".join(
            f"{m.label}: {counts[m]}" for m in VaccineFilter if m != VaccineFilter.ALL
        )
    )
    if mode != VaccineFilter.ALL:
        print(f"Filter: {mode.label.upper()}")
    print()

    if not vaccines:
        print("No vaccinations yet." if not all_vaccines else "No matching vaccinations.")
        return 0

    headers = ["", "ID", "Vaccine", "Date", "Status", "Renews", "Remaining"]
    print(tabulate(make_vaccine_table(vaccines, now), headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Show command
# =============================================================================


def cmd_show(args, tracker: VaccineTracker):
    """Show one vaccination in detail."""
    now = args.as_of or date.today()
    vaccine = tracker.get(args.vaccine_id)
    form = VaccineForm.from_vaccine(vaccine)

    print(f"Vaccine:  {vaccine.name}")
    print(f"ID:       {vaccine.id}")
    print(f"Date:     {vaccine.date.isoformat()}")
    print(f"Status:   {vaccine.status_text(now)} ({vaccine.renewal_subtitle(now)})")
    if vaccine.renewal_date is not None:
        print(f"Renews:   {vaccine.renewal_date.isoformat()} (every {form.summary_text()})")
    action = vaccine.suggested_action(now)
    if action:
        print(f"Action:   {action}")
    return 0


# =============================================================================
# Add / Edit commands
# =============================================================================


def print_vaccine_summary(form: VaccineForm) -> None:
    print(f"  Vaccine: {form.name.strip()}")
    print(f"  Date:    {form.date.isoformat()}")
    if form.should_renew:
        renewal = form.renewal_date()
        print(f"  Renews:  {renewal.isoformat()} ({form.summary_text()})")
    else:
        print("  Renews:  never")
    print()


def cmd_add(args, tracker: VaccineTracker):
    """Record a new vaccination."""
    now = date.today()
    years = args.renew_years or 0
    months = args.renew_months or 0
    form = VaccineForm(
        name=args.name,
        date=args.date or now,
        should_renew=args.renew_years is not None or args.renew_months is not None,
        renewal_years=years,
        renewal_months=months,
    )
    form.validate(now)

    print(f"Adding vaccination to {tracker.storage.path}:")
    print_vaccine_summary(form)

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    vaccine = tracker.add(form, now)
    print(f"Vaccination saved ({short_id(vaccine.id)}).")
    return 0


def cmd_edit(args, tracker: VaccineTracker):
    """Change a recorded vaccination."""
    now = date.today()
    vaccine = tracker.get(args.vaccine_id)
    form = VaccineForm.from_vaccine(vaccine)

    if args.name is not None:
        form.name = args.name
    if args.date is not None:
        form.date = args.date
    if args.no_renewal:
        form.should_renew = False
        form.renewal_years = 0
        form.renewal_months = 0
    elif args.renew_years is not None or args.renew_months is not None:
        form.should_renew = True
        if args.renew_years is not None:
            form.renewal_years = args.renew_years
        if args.renew_months is not None:
            form.renewal_months = args.renew_months
    form.validate(now)

    print(f"Updating {vaccine.name} ({short_id(vaccine.id)}):")
    print_vaccine_summary(form)

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    tracker.update(vaccine.id, form, now)
    print("Vaccination updated.")
    return 0


# =============================================================================
# Delete command
# =============================================================================


def cmd_delete(args, tracker: VaccineTracker):
    """Remove a vaccination and its reminder."""
    vaccine = tracker.get(args.vaccine_id)
    print(f"Deleting {vaccine.name} ({vaccine.date.isoformat()}, {short_id(vaccine.id)})")

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    tracker.delete(vaccine.id)
    print("Vaccination deleted.")
    return 0


# =============================================================================
# Reminders command
# =============================================================================


def make_reminder_table(reminders: List[Reminder]) -> List[List[str]]:
    """Convert reminders to table rows."""
    return [
        [format_date(r.fire_on), short_id(r.vaccine_id), r.title, r.body]
        for r in reminders
    ]


def cmd_reminders(args, tracker: VaccineTracker):
    """Show pending reminders, or fire (print and drop) the due ones."""
    now = args.as_of or date.today()
    reminders = tracker.reminders

    if args.fire:
        fired = reminders.pop_due(now)
        if not fired:
            print("No reminders due.")
            return 0
        for reminder in fired:
            print(f"{reminder.title}: {reminder.body}")
        return 0

    pending = reminders.pending()
    print(f"Pending reminders: {len(pending)}")
    print()
    if pending:
        headers = ["Fires on", "ID", "Title", "Message"]
        print(tabulate(make_reminder_table(pending), headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Main
# =============================================================================


def add_renewal_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--renew-years",
        type=int,
        help="Renewal interval years (0-50); enables renewal",
    )
    parser.add_argument(
        "--renew-months",
        type=int,
        help="Renewal interval months (0-11); enables renewal",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vaccine tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s list
  %(prog)s list --filter expiring
  %(prog)s add "TBE" --date 2025-05-02 --renew-years 3
  %(prog)s add "Covid-19" --renew-months 6
  %(prog)s edit 3f2a --renew-years 5
  %(prog)s edit 3f2a --no-renewal
  %(prog)s delete 3f2a
  %(prog)s reminders --fire
""",
    )
    parser.add_argument(
        "--file",
        type=Path,
        default=None,
        help="Path to vaccine YAML file (default: $VACCINE_DATA_FILE or data/vaccines.yaml)",
    )
    parser.add_argument(
        "--reminders-file",
        type=Path,
        default=None,
        help="Path to reminder YAML file (default: $VACCINE_REMINDERS_FILE or data/reminders.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log storage and reminder details",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # List subcommand
    list_parser = subparsers.add_parser(
        "list", help="Show vaccinations, most urgent renewals first"
    )
    list_parser.add_argument(
        "--filter",
        choices=[m.value for m in VaccineFilter],
        default="all",
        help="Only show some vaccinations (default: all)",
    )
    list_parser.add_argument(
        "--as-of",
        type=parse_date,
        help="Evaluate status as of date (YYYY-MM-DD, default: today)",
    )

    # Show subcommand
    show_parser = subparsers.add_parser("show", help="Show one vaccination")
    show_parser.add_argument("vaccine_id", type=str, help="Vaccine ID (or unique prefix)")
    show_parser.add_argument(
        "--as-of",
        type=parse_date,
        help="Evaluate status as of date (YYYY-MM-DD, default: today)",
    )

    # Add subcommand
    add_parser = subparsers.add_parser("add", help="Record a new vaccination")
    add_parser.add_argument("name", type=str, help="Vaccine name (e.g., 'TBE')")
    add_parser.add_argument(
        "--date",
        type=parse_date,
        help="Vaccination date in YYYY-MM-DD format (default: today)",
    )
    add_renewal_arguments(add_parser)
    add_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    # Edit subcommand
    edit_parser = subparsers.add_parser("edit", help="Change a recorded vaccination")
    edit_parser.add_argument("vaccine_id", type=str, help="Vaccine ID (or unique prefix)")
    edit_parser.add_argument("--name", type=str, help="New vaccine name")
    edit_parser.add_argument(
        "--date",
        type=parse_date,
        help="New vaccination date (YYYY-MM-DD)",
    )
    add_renewal_arguments(edit_parser)
    edit_parser.add_argument(
        "--no-renewal",
        action="store_true",
        help="Stop tracking renewal for this vaccination",
    )
    edit_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be updated without saving",
    )

    # Delete subcommand
    delete_parser = subparsers.add_parser(
        "delete", help="Remove a vaccination and its reminder"
    )
    delete_parser.add_argument("vaccine_id", type=str, help="Vaccine ID (or unique prefix)")
    delete_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be deleted without saving",
    )

    # Reminders subcommand
    reminders_parser = subparsers.add_parser(
        "reminders", help="Show pending renewal reminders"
    )
    reminders_parser.add_argument(
        "--fire",
        action="store_true",
        help="Print due reminders and remove them",
    )
    reminders_parser.add_argument(
        "--as-of",
        type=parse_date,
        help="Evaluate due reminders as of date (YYYY-MM-DD, default: today)",
    )

    return parser


COMMANDS = {
    "list": cmd_list,
    "show": cmd_show,
    "add": cmd_add,
    "edit": cmd_edit,
    "delete": cmd_delete,
    "reminders": cmd_reminders,
}


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    storage = VaccineStorage(args.file or default_data_path())
    reminders = FileReminders(args.reminders_file or default_reminders_path())
    tracker = VaccineTracker(storage, reminders)

    try:
        return COMMANDS[args.command](args, tracker)
    except VaccineValidationError as e:
        for error in e.errors:
            print(f"Error: {error}")
        return 1
    except KeyError as e:
        print(f"Error: {e.args[0]}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
