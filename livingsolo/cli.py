"""CLI entry point: budget, kitchen and to-do commands."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from typing import NoReturn

from dotenv import find_dotenv, load_dotenv

from .config import AppConfig, load_config
from .db import BudgetDB, KitchenDB, TodoDB
from .models import PRIORITIES, PRIORITY_NONE, Urgency
from .views import filter_categories, format_amount, item_urgency, preview_items

_URGENCY_MARKS = {
    Urgency.URGENT: "!!",
    Urgency.WARNING: "! ",
    Urgency.NORMAL: "  ",
}


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="livingsolo",
        description="Household helper: monthly budget, kitchen inventory and to-do list",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to the configuration file (TOML)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # budget
    budget = sub.add_parser("budget", help="Monthly expenses")
    budget_sub = budget.add_subparsers(dest="action")
    budget_sub.add_parser("list", help="List expenses and the monthly total")
    p = budget_sub.add_parser("add", help="Add an expense")
    p.add_argument("name")
    p.add_argument("amount", help="Amount, e.g. 9.99")
    p = budget_sub.add_parser("delete", help="Delete expenses by ID")
    p.add_argument("ids", type=int, nargs="+")

    # kitchen
    kitchen = sub.add_parser("kitchen", help="Kitchen inventory")
    kitchen_sub = kitchen.add_subparsers(dest="action")
    p = kitchen_sub.add_parser("list", help="Show categories and items")
    p.add_argument("--search", "-s", default="", help="Filter by category or item name")
    p.add_argument("--all", action="store_true", help="Show every item, not just the first few")
    kitchen_sub.add_parser("seed", help="Create the default categories")
    p = kitchen_sub.add_parser("add-category", help="Add a category")
    p.add_argument("name")
    p = kitchen_sub.add_parser(
        "delete-category", help="Delete a category and all of its items"
    )
    p.add_argument("id", type=int)
    p.add_argument("--yes", "-y", action="store_true", help="Skip the confirmation prompt")
    p = kitchen_sub.add_parser("add-item", help="Add an item")
    p.add_argument("name")
    target = p.add_mutually_exclusive_group(required=True)
    target.add_argument("--category", type=int, help="Existing category ID")
    target.add_argument("--new-category", type=str, help="Create this category for the item")
    p.add_argument("--quantity", "-q", type=int, default=1)
    p.add_argument(
        "--expires", type=date.fromisoformat, default=None, metavar="YYYY-MM-DD"
    )
    for name, help_text in (
        ("inc", "Increase an item's quantity by one"),
        ("dec", "Decrease an item's quantity by one (removes it at zero)"),
        ("remove", "Remove an item"),
    ):
        p = kitchen_sub.add_parser(name, help=help_text)
        p.add_argument("id", type=int)

    # todo
    todo = sub.add_parser("todo", help="To-do list")
    todo_sub = todo.add_subparsers(dest="action")
    todo_sub.add_parser("list", help="List tasks")
    p = todo_sub.add_parser("add", help="Add a task")
    p.add_argument("title")
    p.add_argument("--priority", "-p", choices=PRIORITIES, default=PRIORITY_NONE)
    p = todo_sub.add_parser("done", help="Toggle a task between open and done")
    p.add_argument("id", type=int)
    p = todo_sub.add_parser("delete", help="Delete tasks by ID")
    p.add_argument("ids", type=int, nargs="+")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    load_dotenv(find_dotenv(usecwd=True))
    config = load_config(args.config)

    match args.command:
        case "budget":
            _cmd_budget(config, args)
        case "kitchen":
            _cmd_kitchen(config, args)
        case "todo":
            _cmd_todo(config, args)


def _fail(message: str) -> NoReturn:
    print(message, file=sys.stderr)
    sys.exit(1)


def _cmd_budget(config: AppConfig, args) -> None:
    currency = config.budget.currency
    with BudgetDB(config.database.path) as db:
        match args.action:
            case "add":
                expense = db.add_expense(args.name, args.amount)
                if expense is None:
                    _fail("Expense not added: give a name and a non-negative amount.")
                print(f"Added #{expense.id} {expense.name} {format_amount(expense.amount, currency)}")
            case "delete":
                count = db.delete_expenses(args.ids)
                print(f"Deleted {count} expense(s)")
            case _:
                expenses = db.list_expenses()
                if not expenses:
                    print("No expenses yet.")
                for e in expenses:
                    print(f"  #{e.id:<4} {e.name:<24} {format_amount(e.amount, currency):>12}")
                print(f"Estimated monthly total: {format_amount(db.total(), currency)}")


def _cmd_kitchen(config: AppConfig, args) -> None:
    kc = config.kitchen
    with KitchenDB(
        config.database.path, default_shelf_days=kc.default_shelf_days
    ) as db:
        match args.action:
            case "seed":
                created = db.seed_default_categories(kc.default_categories)
                print(f"Created {len(created)} categories")
            case "add-category":
                category = db.add_category(args.name)
                if category is None:
                    _fail("Category not added: name must not be blank.")
                print(f"Added category #{category.id} {category.name}")
            case "delete-category":
                category = db.get_category(args.id)
                if category is None:
                    _fail(f"No category #{args.id}")
                if not args.yes:
                    answer = input(
                        f'Delete "{category.name}" and all its items? '
                        "This cannot be undone. [y/N] "
                    )
                    if answer.strip().lower() not in ("y", "yes"):
                        print("Cancelled")
                        return
                if not db.delete_category(args.id):
                    _fail(f"Could not delete category #{args.id}")
                print(f"Deleted {category.name} ({len(category.items)} item(s))")
            case "add-item":
                item = db.add_item(
                    args.name,
                    args.category,
                    quantity=args.quantity,
                    expiry_date=args.expires,
                    new_category_name=args.new_category,
                )
                if item is None:
                    _fail(
                        "Item not added: give a name, a quantity between 1 and 999 "
                        "and an existing or new category."
                    )
                print(f"Added #{item.id} {item.name} x{item.quantity} (expires {item.expiry_date})")
            case "inc":
                item = db.increment_quantity(args.id)
                if item is None:
                    _fail(f"No item #{args.id}")
                print(f"{item.name}: {item.quantity}")
            case "dec":
                before = db.get_item(args.id)
                if before is None:
                    _fail(f"No item #{args.id}")
                item = db.decrement_quantity(args.id)
                if item is None:
                    print(f"{before.name}: used up and removed")
                else:
                    print(f"{item.name}: {item.quantity}")
            case "remove":
                if not db.delete_item(args.id):
                    _fail(f"No item #{args.id}")
                print(f"Removed item #{args.id}")
            case _:
                _show_kitchen(
                    db,
                    config,
                    search=getattr(args, "search", ""),
                    show_all=getattr(args, "all", False),
                )


def _show_kitchen(db: KitchenDB, config: AppConfig, *, search: str, show_all: bool) -> None:
    kc = config.kitchen
    db.seed_default_categories(kc.default_categories)
    today = date.today()
    categories = filter_categories(db.list_categories(), search)
    if not categories:
        print("Nothing matches your search.")
        return
    for category in categories:
        print(f"[{category.id}] {category.name}")
        limit = len(category.items) if show_all else kc.preview_limit
        preview = preview_items(category, limit=limit)
        if not preview.items:
            print("     No items yet")
        for item in preview.items:
            mark = _URGENCY_MARKS[item_urgency(item, today, kc.warning_days)]
            print(
                f"  {mark} #{item.id:<4} {item.name:<20} "
                f"Qty: {item.quantity:<4} {item.expiry_date:%d %b %Y}"
            )
        if preview.more_label:
            print(f"     {preview.more_label}")


def _cmd_todo(config: AppConfig, args) -> None:
    with TodoDB(config.database.path) as db:
        match args.action:
            case "add":
                task = db.add_task(args.title, args.priority)
                if task is None:
                    _fail("Task not added.")
                print(f"Added #{task.id} {task.title} [{task.priority}]")
            case "done":
                task = db.toggle_done(args.id)
                if task is None:
                    _fail(f"No task #{args.id}")
                state = "done" if task.is_done else "open"
                print(f"#{task.id} {task.title}: {state}")
            case "delete":
                count = db.delete_tasks(args.ids)
                print(f"Deleted {count} task(s)")
            case _:
                tasks = db.list_tasks()
                if not tasks:
                    print("Nothing to do.")
                for t in tasks:
                    box = "[x]" if t.is_done else "[ ]"
                    print(f"  {box} #{t.id:<4} {t.title:<30} {t.priority}")
