"""
Main entry point for Chat Insights.
"""

import asyncio
import argparse
import json
import logging
import os
import sys
from datetime import datetime

from .config import BaseConfig, load_config_from_file
from .dashboard import DashboardController
from .models import FilterSpec, Status, STATUS_ALL
from .models.filters import DATE_PRESET_LABELS
from .analytics import PERIOD_DAY, PERIOD_WEEK, PERIOD_MONTH
from .sources import (
    AuthenticationError,
    HttpConversationSource,
    JsonFileConversationSource,
    create_session_store,
)
from .utils import setup_logging, ensure_directory, sanitize_filename
from .utils.export import export_dashboard_report
from .utils.report_logging import DashboardReportLogger

PRESET_ALL = "all"


def parse_arguments(argv=None):
    """
    Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(description='Chat Insights - Sales chat analytics dashboard')
    parser.add_argument("--run_id", type=str, help="Optional run ID used in log and report file names")
    parser.add_argument("--config", type=str, help="Path to a Python config file")
    parser.add_argument("--input", type=str, help="Read conversations from a JSON export instead of the API")
    parser.add_argument("--username", type=str, help="API username (logs in before fetching)")
    parser.add_argument("--password", type=str,
                        help="API password; defaults to the CHAT_INSIGHTS_PASSWORD environment variable")

    filters = parser.add_argument_group("filters")
    filters.add_argument("--preset", choices=list(DATE_PRESET_LABELS) + [PRESET_ALL],
                         help="Relative date range; 'all' disables the configured default")
    filters.add_argument("--start", type=str, help="Start date (YYYY-MM-DD)")
    filters.add_argument("--end", type=str, help="End date (YYYY-MM-DD)")
    filters.add_argument("--status", choices=[s.value for s in Status] + [STATUS_ALL], default=STATUS_ALL)
    filters.add_argument("--product", type=str, default="")
    filters.add_argument("--client", type=str, default="", help="Client name or phone substring")
    filters.add_argument("--search", type=str, default="", help="Free-text search")

    parser.add_argument("--period", choices=[PERIOD_DAY, PERIOD_WEEK, PERIOD_MONTH],
                        help="Time-series bucket size")
    parser.add_argument("--export", action="store_true", help="Write CSV reports to OUTPUT_DIR")
    parser.add_argument("--json", action="store_true", help="Print the dashboard snapshot as JSON")
    return parser.parse_args(argv)


def build_filters(args, config: BaseConfig) -> FilterSpec:
    if args.preset is None:
        date_preset = config.DEFAULT_DATE_PRESET
    elif args.preset == PRESET_ALL:
        date_preset = ""
    else:
        date_preset = args.preset

    return FilterSpec(
        date_preset=date_preset,
        start_date=args.start,
        end_date=args.end,
        status=args.status,
        product=args.product,
        client=args.client,
        search_text=args.search,
    )


def build_source(args, config: BaseConfig):
    if args.input:
        return JsonFileConversationSource(args.input)

    source = HttpConversationSource(config, create_session_store(config))
    if args.username:
        password = args.password or os.environ.get("CHAT_INSIGHTS_PASSWORD", "")
        result = source.login(args.username, password)
        if not result.success:
            raise AuthenticationError(result.message)
    return source


async def main(argv=None):
    """Main application entry point."""
    args = parse_arguments(argv)

    try:
        # Load configuration
        config = load_config_from_file(args.config) if args.config else BaseConfig()

        # Override run_id if provided
        if args.run_id:
            config.RUN_ID = args.run_id
        run_id = sanitize_filename(config.RUN_ID or datetime.now().strftime("%Y%m%d_%H%M%S"))

        # Setup logging
        logger = setup_logging(config.LOG_FILE, config.RUN_ID)
        logger.info(f"Starting Chat Insights with config from {args.config or 'defaults'}")

        controller = DashboardController(build_source(args, config), config, filters=build_filters(args, config))
        if args.period:
            controller.set_period(args.period)

        if not await controller.refresh():
            logger.error(f"Could not load conversations: {controller.error}")
            sys.exit(1)

        report_logger = DashboardReportLogger(
            config,
            run_id,
            controller.filtered_conversations,
            period=controller.period,
            active_filters=controller.active_filters,
        )
        report_logger.log_all()

        if args.json:
            print(json.dumps(controller.snapshot(), ensure_ascii=False, indent=2))

        if args.export:
            ensure_directory(config.OUTPUT_DIR)
            export_dashboard_report(
                controller.filtered_conversations,
                config.OUTPUT_DIR,
                run_id,
                period=controller.period,
                top_n=config.TOP_PRODUCTS_LIMIT,
            )
            report_logger.write_summary_to_file()

        logger.info("Dashboard run completed successfully")

    except Exception as e:
        logging.error(f"Error in Chat Insights: {e}", exc_info=True)
        sys.exit(1)


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
