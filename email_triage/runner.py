from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import Callable, List, Optional, Sequence

from .config import ConfigError, load_config
from .models import Email, TriageResult
from .reporter import format_email_header, format_result, format_summary, summarize
from .sample_emails import SAMPLE_EMAILS
from .supervisor import SupervisorAgent, build_supervisor

logger = logging.getLogger(__name__)

ResultCallback = Callable[[int, Email, TriageResult], None]


def triage_batch(
    supervisor: SupervisorAgent,
    emails: Sequence[Email],
    on_result: Optional[ResultCallback] = None,
) -> List[TriageResult]:
    """
    Triage emails one after another, keeping input order.

    An email whose triage raises is logged and left out of the results;
    the rest of the batch still runs.
    """
    results: List[TriageResult] = []
    for index, email in enumerate(emails, start=1):
        try:
            result = supervisor.triage_email(email)
        except Exception:
            logger.exception("Error processing email %s", email.id)
            continue
        results.append(result)
        if on_result is not None:
            on_result(index, email, result)
    return results


def run_once(
    emails: Sequence[Email] = SAMPLE_EMAILS,
    spam_filter: Optional[str] = None,
    as_json: bool = False,
) -> int:
    """
    Run the triage system once over ``emails``

    Args:
        emails: Emails to triage (the bundled samples by default)
        spam_filter: "llm" or "keywords", overriding TRIAGE_SPAM_FILTER
        as_json: Print results as JSON instead of the console report
    """
    try:
        cfg = load_config()
    except ConfigError as exc:
        print(f"❌ Error: {exc}")
        print("Please set your OpenAI API key in a .env file:")
        print("OPENAI_API_KEY=your_api_key_here")
        return 1

    if spam_filter:
        cfg.triage.spam_filter = spam_filter

    def _print_result(index: int, email: Email, result: TriageResult) -> None:
        print(format_email_header(email, index, len(emails)))
        print(format_result(result))
        print("=" * 70)

    with build_supervisor(cfg) as supervisor:
        if as_json:
            results = triage_batch(supervisor, emails)
            print(json.dumps([asdict(r) for r in results], indent=2))
            return 0

        print("🚀 Starting Multi-Agent Email Triage System")
        print("==============================================\n")
        print(f"📧 Processing {len(emails)} sample emails...")
        results = triage_batch(supervisor, emails, on_result=_print_result)

    print()
    print(format_summary(summarize(results)))
    print("\n✨ Multi-Agent Email Triage Complete!")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Multi-Agent Email Triage System",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Triage the bundled sample emails
  python -m email_triage.runner

  # Use the keyword spam filter instead of the model
  python -m email_triage.runner --spam-filter keywords

  # Machine-readable output
  python -m email_triage.runner --json
        """
    )

    parser.add_argument(
        '--spam-filter',
        choices=["llm", "keywords"],
        help='Spam filter to run before the specialists (default: TRIAGE_SPAM_FILTER or llm)'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Print triage results as JSON'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    return run_once(spam_filter=args.spam_filter, as_json=args.json)


if __name__ == "__main__":
    sys.exit(main())
