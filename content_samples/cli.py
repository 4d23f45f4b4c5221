#!/usr/bin/env python3
"""
Command line entry point for the test order workflow.

Loads the merchant configuration, prepares the Content API clients, checks the
account type and runs the workflow against the sandbox service.
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from rich.console import Console

from content_samples.core.config import (
    get_config_dir,
    get_service_endpoints,
    get_settings,
    load_merchant_info,
    resolve_access_token,
)
from content_samples.core.logging_config import setup_logging
from content_samples.db.content_clients import ContentAPIClient, must_not_be_mca
from content_samples.services.orders import OrdersWorkflow, WorkflowResult
from content_samples.utils.error_handler import AppException, log_error

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run a test order through its lifecycle on the Content API sandbox.",
    )
    parser.add_argument(
        "--config_path",
        default=None,
        help="Directory holding content/merchant-info.json (default: ~/shopping-samples)",
    )
    return parser


async def run_workflow(config_path: Optional[str], console: Console) -> WorkflowResult:
    """Bootstrap configuration and clients, then run the workflow."""
    settings = get_settings()
    config_dir = get_config_dir(config_path)
    merchant_info = load_merchant_info(config_dir)
    access_token = resolve_access_token(merchant_info, settings)
    endpoints = get_service_endpoints(settings)

    async with ContentAPIClient(endpoints, access_token) as client:
        is_mca = await client.accounts.retrieve_mca_status(merchant_info.merchant_id)
        must_not_be_mca(is_mca, "Orders can only be managed for merchant accounts, not multi-client accounts.")

        workflow = OrdersWorkflow(
            client.orders,
            merchant_info.merchant_id,
            console=console,
            template_name=settings.TEST_ORDER_TEMPLATE,
            page_size=settings.ORDERS_PAGE_SIZE,
        )
        return await workflow.run()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()
    console = Console()

    try:
        result = asyncio.run(run_workflow(args.config_path, console))
    except AppException as e:
        log_error(e, {"operation": "orders_workflow"})
        console.print(f"Workflow aborted: {e.message}", style="bold red", markup=False, highlight=False)
        return 1

    logger.info(f"Workflow completed for order {result.order_id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
