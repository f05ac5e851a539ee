#!/usr/bin/env python3
"""
TikTok Marketing API command-line runner.

Runs one lead operation and prints the result as JSON on stdout.

Usage:
    # Exchange an OAuth auth code
    python -m tiktok_marketing.run_tiktok access-token --auth-code CODE

    # List lead forms in the sandbox
    python -m tiktok_marketing.run_tiktok --sandbox forms --advertiser-id ID --access-token TOKEN

    # Replace the test lead of a form
    python -m tiktok_marketing.run_tiktok test-lead create --advertiser-id ID --access-token TOKEN --page-id PAGE

    # Export leads (waits 10 seconds for the export task)
    python -m tiktok_marketing.run_tiktok leads --advertiser-id ID --access-token TOKEN --page-id PAGE

Environment Variables:
    Required (unless --config is given):
    - TIKTOK_APP_ID: Application id
    - TIKTOK_SECRET: Application secret

    Optional:
    - TIKTOK_TIMEOUT: Request timeout in seconds
    - TIKTOK_VERIFY_SSL: "false" to skip TLS verification
    - TIKTOK_SANDBOX: "true" to use the sandbox host by default
    - LOG_LEVEL: Logging level (default: INFO)

Exit Codes:
    0: Success
    1: Configuration error
    2: Transport error
    3: Unexpected error
"""

import argparse
import json
import sys
from typing import List, Optional

from loguru import logger

from shared.utils.env import get_env_bool
from shared.utils.logging import resolve_level, setup_logging
from tiktok_marketing.api_client import TikTokAPIClient
from tiktok_marketing.core.config import ClientConfig
from tiktok_marketing.core.constants import ENV_SANDBOX
from tiktok_marketing.core.exceptions import ConfigurationError, TransportError
from tiktok_marketing.domain.models import Advertiser, JsonValue, RequestOptions


def _add_advertiser_arguments(parser: argparse.ArgumentParser, page: bool = True) -> None:
    parser.add_argument("--advertiser-id", required=True, help="Advertiser account id")
    parser.add_argument("--access-token", required=True, help="Advertiser access token")
    if page:
        parser.add_argument("--page-id", required=True, help="Lead form (page) id")


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="TikTok Marketing API lead operations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "--config",
        type=str,
        help="YAML credentials file with a 'tiktok' section (default: environment)",
    )
    parser.add_argument(
        "--sandbox",
        action="store_true",
        default=get_env_bool(ENV_SANDBOX, False),
        help="Use the sandbox environment",
    )
    parser.add_argument(
        "--no-verify-ssl",
        action="store_true",
        help="Skip TLS certificate verification",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=resolve_level(),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    token = commands.add_parser("access-token", help="Exchange an OAuth auth code")
    token.add_argument("--auth-code", required=True, help="Code from the OAuth redirect")

    forms = commands.add_parser("forms", help="List lead forms")
    _add_advertiser_arguments(forms, page=False)
    forms.add_argument("--full", action="store_true", help="Print the full payload")

    commands.add_parser("subscriptions", help="List lead subscriptions")

    subscribe = commands.add_parser("subscribe", help="Subscribe a callback URL to a form")
    _add_advertiser_arguments(subscribe, page=False)
    subscribe.add_argument("--form-id", required=True, help="Lead form (page) id")
    subscribe.add_argument("--callback-url", required=True, help="Lead callback URL")

    unsubscribe = commands.add_parser("unsubscribe", help="Cancel a lead subscription")
    unsubscribe.add_argument("--subscription-id", required=True, help="Subscription id")

    test_lead = commands.add_parser("test-lead", help="Manage the test lead of a form")
    test_lead.add_argument("action", choices=["get", "create", "delete"])
    _add_advertiser_arguments(test_lead)

    leads = commands.add_parser("leads", help="Export and download leads of a form")
    _add_advertiser_arguments(leads)

    return parser.parse_args(argv)


def load_configuration(args: argparse.Namespace) -> ClientConfig:
    """Build the client configuration from the CLI arguments.

    Raises:
        ConfigurationError: If the credentials file is invalid
    """
    if args.config:
        logger.info(f"Loading configuration from {args.config}")
        return ClientConfig.from_yaml(args.config)
    return ClientConfig.from_env()


def run_command(client: TikTokAPIClient, args: argparse.Namespace) -> JsonValue:
    """Dispatch the parsed command to the matching client operation."""
    options = RequestOptions(
        sandbox=args.sandbox,
        verify_ssl=client.config.verify_ssl and not args.no_verify_ssl,
    )

    if args.command == "access-token":
        return client.get_access_token(args.auth_code, options=options)
    if args.command == "subscriptions":
        return client.get_subscriptions(options=options)
    if args.command == "unsubscribe":
        return client.unsubscribe_to_leads(args.subscription_id, options=options)

    advertiser = Advertiser(advertiser_id=args.advertiser_id, access_token=args.access_token)

    if args.command == "forms":
        return client.get_forms(advertiser, full=args.full, options=options)
    if args.command == "subscribe":
        return client.subscribe_to_leads(
            advertiser, args.form_id, args.callback_url, options=options
        )
    if args.command == "leads":
        return client.get_leads(advertiser, args.page_id, options=options)

    test_lead_actions = {
        "get": client.get_test_lead,
        "create": client.create_test_lead,
        "delete": client.delete_test_lead,
    }
    return test_lead_actions[args.action](advertiser, args.page_id, options=options)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    args = parse_arguments(argv)
    setup_logging(args.log_level)

    logger.info(f"TikTok Marketing API: {args.command} ({'sandbox' if args.sandbox else 'production'})")

    try:
        config = load_configuration(args)
        with TikTokAPIClient.from_config(config) as client:
            result = run_command(client, args)

        print(json.dumps(result, indent=2, ensure_ascii=False))
        logger.success(f"{args.command} completed")
        return 0

    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    except TransportError as e:
        logger.error(f"Transport error: {e}")
        return 2

    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 3


if __name__ == "__main__":
    sys.exit(main())
