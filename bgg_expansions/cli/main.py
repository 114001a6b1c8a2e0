"""
Main CLI entry point for the BGG expansion tracker.
"""

import argparse
import logging
import sys
from typing import List, Optional

from ..catalog import BGGCatalogClient
from ..config import Settings
from ..error_handling import BGGExpansionsError, InvalidArgument
from ..logging_config import setup_logging
from ..models import ReconciliationResult
from ..notify import ConsoleNotifier, EmailNotifier, Notifier
from ..reconcile import ExpansionReconciler
from ..utils import load_ignore_list

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Report BoardGameGeek expansions for your owned games that you do not own yet"
    )
    parser.add_argument("--username", type=str, default=None, help="BGG username (overrides BGG_USERNAME)")
    parser.add_argument("--no-email", action="store_true", help="Do not send the email digest even if SMTP is configured")
    parser.add_argument("--quiet", action="store_true", help="Do not print unowned expansions to the console")
    parser.add_argument("--log-level", type=str, default=None, help="Log level (overrides LOG_LEVEL)")
    parser.add_argument("--log-file", type=str, default=None, help="Log file path (overrides LOG_FILE_NAME)")
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Read settings from the environment and apply command line overrides."""
    overrides = {}
    if args.username:
        overrides["bgg_username"] = args.username
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.log_file:
        overrides["log_file_name"] = args.log_file
    return Settings.from_env(**overrides)


def build_reconciler(settings: Settings, send_email: bool = True,
                     print_report: bool = True) -> ExpansionReconciler:
    """
    Wire up the client, ignore lists and notifiers for a run.

    Args:
        settings: Runtime settings
        send_email: Whether to add the email notifier when SMTP is configured
        print_report: Whether to add the console notifier

    Returns:
        Ready to run reconciler
    """
    client = BGGCatalogClient(
        base_url=settings.bgg_api_base_url,
        access_token=settings.bgg_access_token,
        retry_wait_seconds=settings.retry_wait_seconds,
        max_attempts=settings.retry_max_attempts,
        timeout=settings.request_timeout_seconds,
    )

    notifiers: List[Notifier] = []
    if print_report:
        notifiers.append(ConsoleNotifier())
    if send_email and settings.email_enabled:
        notifiers.append(EmailNotifier.from_settings(settings))
    elif send_email:
        logger.debug("SMTP_HOST not set, email digest disabled")

    return ExpansionReconciler(
        client=client,
        username=settings.bgg_username,
        game_ignore=load_ignore_list(settings.game_ignore_file_path),
        expansion_ignore=load_ignore_list(settings.expansion_ignore_file_path),
        notifiers=notifiers,
    )


def print_summary(result: ReconciliationResult, username: str) -> None:
    print("\n" + "=" * 60)
    print(f"EXPANSION CHECK FOR {username}")
    print("=" * 60)
    print(f"Games with unowned expansions: {len(result.games)}")
    print(f"Unowned expansions: {result.unowned_count}")
    print("=" * 60)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args)
    except InvalidArgument as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file_name,
        max_bytes=settings.log_file_max_bytes,
        backups=settings.log_file_backups,
    )

    try:
        reconciler = build_reconciler(
            settings, send_email=not args.no_email, print_report=not args.quiet
        )
        result = reconciler.run()
        if not args.quiet:
            print_summary(result, settings.bgg_username)
        return 0
    except KeyboardInterrupt:
        print("\nProcess interrupted by user")
        return 130
    except BGGExpansionsError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error in main: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
