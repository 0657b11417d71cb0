"""
ContactKeeper — CLI Entry Point

Usage:
  # Verify stale CRM contacts against public search engines
  python main.py run --limit 10 --months 6

  # Preview without writing anything back, scoring data quality only
  python main.py run --dry-run --mode quality --test-email

  # Check one person without touching the CRM
  python main.py verify "Jane Smith" --company "Acme Corp"

  # Set a contact's verification status by hand
  python main.py update 003XXXXXXXX CONFIRMED --notes "Called reception"

  # Count contacts per verification status
  python main.py stats
"""

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger("contactkeeper")

STATUS_ICONS = {
    "CONFIRMED": "✅",
    "NEEDS_REVIEW": "⚠️",
    "OUTDATED": "❌",
    "UNKNOWN": "❓",
    "ERROR": "💥",
}


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="ContactKeeper — CRM contact freshness verification"
    )
    parser.add_argument("-v", "--verbose", action="store_true", default=None, help="Verbose logging")

    # -v is also accepted after the subcommand
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-v", "--verbose", action="store_true", default=argparse.SUPPRESS, help="Verbose logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # run command
    run_parser = subparsers.add_parser(
        "run", parents=[common], help="Verify contacts and write results back"
    )
    run_parser.add_argument("-l", "--limit", type=int, help="Max contacts to verify (default: 10)")
    run_parser.add_argument(
        "-m", "--months", type=int, help="Verify contacts not checked in N months (default: 6)"
    )
    run_parser.add_argument(
        "-d", "--dry-run", action="store_true", default=None, help="Run without updating the CRM"
    )
    run_parser.add_argument(
        "-t", "--test-email", action="store_true", default=None, help="Include email domain validation"
    )
    run_parser.add_argument(
        "--mode", choices=["search", "quality"], help="Verification path (default: search)"
    )
    run_parser.add_argument("--batch-size", type=int, help="Writes per chunk (default: 10)")
    run_parser.add_argument(
        "--min-delay-ms", type=int, help="Minimum spacing between outbound calls (default: 1000)"
    )

    # verify command
    verify_parser = subparsers.add_parser(
        "verify", parents=[common], help="Search and classify a single person"
    )
    verify_parser.add_argument("name", help="Contact name")
    verify_parser.add_argument("--company", help="Contact company")

    # update command
    update_parser = subparsers.add_parser(
        "update", parents=[common], help="Set one contact's verification status"
    )
    update_parser.add_argument("contact_id", help="CRM contact id")
    update_parser.add_argument("status", help="CONFIRMED, OUTDATED, UNKNOWN or NEEDS_REVIEW")
    update_parser.add_argument("--notes", default="", help="Verification notes")

    # stats command
    subparsers.add_parser(
        "stats", parents=[common], help="Count contacts per verification status"
    )

    return parser.parse_args(argv)


def print_results(results) -> None:
    print("\nRESULTS PREVIEW (Dry Run)")
    for idx, result in enumerate(results, start=1):
        print(f"\n{idx}. {result.contact_name} ({result.company})")
        print(f"   Status: {STATUS_ICONS.get(result.status.value, '❓')} {result.status.value}")
        if result.confidence is not None:
            print(f"   Confidence: {result.confidence * 100:.0f}%")
        print(f"   Notes: {result.notes}")
        if result.source_url:
            print(f"   Source: {result.source_url}")
        if result.issues:
            print(f"   Issues: {', '.join(result.issues)}")
        if result.recommendations:
            print(f"   Recommendations: {', '.join(result.recommendations)}")


async def run_batch(config):
    from contactkeeper.infrastructure.container import Container
    from contactkeeper.use_cases.process_batch import ProcessBatchRequest

    container = Container(config)
    try:
        if config.dry_run:
            logger.info("Running in DRY RUN mode - no changes will be made to the CRM")
        response = await container.process_batch_use_case.execute(
            ProcessBatchRequest(
                limit=config.contact_limit,
                months=config.stale_months,
                dry_run=config.dry_run,
            )
        )
    finally:
        await container.close()

    if not response.results:
        print("No contacts found that need verification")
        return response

    if config.dry_run:
        print_results(response.results)

    print("\n" + "=" * 70)
    print(response.summary.format_summary())
    print(f"Processing rate: {response.throttled_calls} throttled operations")
    print("=" * 70)

    if response.outcome.errors:
        print(f"\n⚠ {len(response.outcome.errors)} write error(s):")
        for err in response.outcome.errors:
            print(f"  • {err}")

    if response.report_path:
        print(f"\nReport saved to: {response.report_path}")
    return response


async def verify_one(config, name: str, company):
    from contactkeeper.infrastructure.container import Container

    container = Container(config)
    try:
        classification = await container.verify_use_case.verify_by_name(name, company)
    finally:
        await container.close()

    print(f"Verification result for {name}:")
    print(f"Status: {classification.status.value}")
    print(f"Notes: {classification.notes}")
    print(f"Source: {classification.source_url or 'N/A'}")
    return classification


async def update_one(config, contact_id: str, status: str, notes: str):
    from contactkeeper.infrastructure.container import Container
    from contactkeeper.domain.interfaces.i_crm_repository import CrmConnectionError
    from contactkeeper.use_cases.update_contact import UpdateContactRequest

    container = Container(config)
    try:
        applied = await container.update_use_case.execute(
            UpdateContactRequest(contact_id=contact_id, status=status, notes=notes)
        )
    except ValueError as e:
        logger.error(str(e))
        return 2
    except CrmConnectionError:
        raise
    except Exception as e:
        raise CrmConnectionError(f"Failed to update contact {contact_id}: {e}") from e
    finally:
        await container.close()
    print(f"Successfully updated contact {contact_id} with status: {applied.value}")
    return 0


async def show_stats(config):
    from contactkeeper.infrastructure.container import Container

    container = Container(config)
    try:
        stats = await container.repository.get_verification_stats()
    finally:
        await container.close()
    print("Contact Verification Statistics:")
    if not stats:
        print("  (no verified contacts yet)")
    for status, count in stats.items():
        print(f"  {status}: {count} contacts")


def build_config(args):
    from contactkeeper.infrastructure.config import Config

    config = Config.from_env()
    overrides = {"verbose": args.verbose}
    if args.command == "run":
        overrides.update(
            contact_limit=args.limit,
            stale_months=args.months,
            dry_run=args.dry_run,
            email_validation=args.test_email,
            verification_mode=args.mode,
            batch_size=args.batch_size,
            min_request_delay_ms=args.min_delay_ms,
        )
    return config.with_overrides(**overrides)


def main(argv=None) -> int:
    from contactkeeper.domain.interfaces.i_crm_repository import CrmConnectionError

    args = parse_args(argv)
    try:
        config = build_config(args)
    except EnvironmentError as e:
        configure_logging(False)
        logger.error(f"Configuration error: {e}")
        return 1

    configure_logging(config.verbose)

    try:
        if args.command == "run":
            asyncio.run(run_batch(config))
        elif args.command == "verify":
            asyncio.run(verify_one(config, args.name, args.company))
        elif args.command == "update":
            return asyncio.run(update_one(config, args.contact_id, args.status, args.notes))
        elif args.command == "stats":
            asyncio.run(show_stats(config))
    except CrmConnectionError as e:
        logger.error(f"Cannot continue without CRM connection: {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("Received interrupt signal. Shutting down")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
