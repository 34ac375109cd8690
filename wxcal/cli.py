"""CLI entry point for the emoji weather calendar."""

import argparse
import asyncio
import logging
from datetime import date

from pydantic import ValidationError

from wxcal.config.loader import get_config_value, load_config
from wxcal.config.schema import CalendarConfig
from wxcal.ingest.open_meteo_client import OpenMeteoClient
from wxcal.lifecycle.controller import QueryStatus
from wxcal.models.common import local_today, parse_year_month, parse_ymd
from wxcal.models.view import ViewState
from wxcal.render.snapshot import CalendarSnapshot
from wxcal.render.text import render_day, render_month
from wxcal.session import CalendarSession

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="wxcal",
        description="Month calendar annotated with Open-Meteo weather emoji",
    )
    parser.add_argument("--config", default=None, help="Config YAML path")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # month
    month_p = sub.add_parser("month", help="Show the month grid")
    month_p.add_argument("--city", help="City to geocode (default from config)")
    month_p.add_argument("--month", help="Month to show, YYYY-MM")
    month_p.add_argument("--today", help="Override today, YYYY-MM-DD")

    # day
    day_p = sub.add_parser("day", help="Show hourly detail for one day")
    day_p.add_argument("--date", required=True, help="Day to show, YYYY-MM-DD")
    day_p.add_argument("--city", help="City to geocode (default from config)")
    day_p.add_argument("--today", help="Override today, YYYY-MM-DD")

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Print one config value")
    get_p.add_argument("key", help="Dotted key, e.g. forecast.horizon_days")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except (OSError, ValueError, ValidationError) as e:
        print(f"Error: {e}")
        return 2

    if args.command == "month":
        return _run_view(config, args, show_day=False)
    elif args.command == "day":
        return _run_view(config, args, show_day=True)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _run_view(config: CalendarConfig, args, show_day: bool) -> int:
    try:
        today = parse_ymd(args.today) if args.today else local_today()
        view = ViewState.for_today(today, args.city or config.display.default_city)
        if show_day:
            selected = parse_ymd(args.date)
            view = ViewState(year=selected.year, month=selected.month, city=view.city)
        elif args.month:
            year, month = parse_year_month(args.month)
            view = ViewState(year=year, month=month, city=view.city)
    except ValueError as e:
        print(f"Error: {e}")
        return 2

    selected = parse_ymd(args.date) if show_day else None
    snap = asyncio.run(_collect(config, view, today, selected))

    table = config.code_table()
    print(render_month(snap, table), end="")
    if show_day:
        print()
        if snap.day_open:
            print(render_day(snap, table), end="")
        else:
            print(f"No daily data for {args.date}; nothing to show.")

    if snap.geocode_status in (QueryStatus.EMPTY, QueryStatus.ERROR):
        return 1
    return 0


async def _collect(
    config: CalendarConfig, view: ViewState, today: date, selected: date | None
) -> CalendarSnapshot:
    async with OpenMeteoClient(config.api, config.forecast.temperature_unit) as client:
        session = CalendarSession(client, config, view, today=lambda: today)
        try:
            await session.settle()
            if selected is not None and session.select_date(selected):
                await session.settle()
            return CalendarSnapshot.from_session(session)
        finally:
            await session.aclose()


def _cmd_config(config: CalendarConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            value = get_config_value(config, args.key)
        except (KeyError, IndexError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        if hasattr(value, "model_dump_json"):
            print(value.model_dump_json(indent=2))
        else:
            print(value)
        return 0
    else:
        print("Use: config show | config get KEY")
        return 1
