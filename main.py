"""
HH → Airtable - CLI Entry Point.

Batch-sync resumes into Airtable using the login saved by the web app.

Usage:
    python main.py <resume_id> [<resume_id> ...] [--paid]
"""

import asyncio
import logging
import sys

from dotenv import load_dotenv

load_dotenv()

from hh_airtable.config import settings
from hh_airtable.models import SyncReport
from hh_airtable.session import TokenStore
from hh_airtable.sync.dedup import Deduplicator
from hh_airtable.sync.orchestrator import SyncOrchestrator
from hh_airtable.sync.pacing import FixedIntervalPacer
from hh_airtable.tools import AirtableClient, ResumeClient


def print_report(report: SyncReport) -> None:
    print("-" * 40)
    for outcome in report.outcomes:
        if outcome.status == "saved":
            detail = "paid contacts" if outcome.paid else ("free contacts" if outcome.had_free_contacts else "no contacts")
            print(f"  [OK]   {outcome.resume_id} ({detail})")
        elif outcome.status == "duplicate":
            print(f"  [SKIP] {outcome.resume_id} (already in Airtable)")
        else:
            print(f"  [FAIL] {outcome.resume_id} at {outcome.stage}: {outcome.reason}")
    print("-" * 40)
    print(f"Total:                {report.total}")
    print(f"Saved:                {report.saved}")
    print(f"  with free contacts: {report.saved_with_free_contacts}")
    print(f"  with paid unlock:   {report.paid_unlocked}")
    print(f"  without contacts:   {report.saved_without_contacts}")
    print(f"Duplicates:           {report.duplicates}")
    print(f"Errors:               {report.errors}")


async def run(resume_ids: list[str], allow_paid_unlock: bool) -> int:
    record = TokenStore(settings.tokens_file).load()
    if record is None or not record.tokens.is_usable:
        print(f"Error: no saved login in {settings.tokens_file}. Log in through the web app first.")
        return 1

    store = AirtableClient.from_settings()
    orchestrator = SyncOrchestrator(
        ResumeClient.from_settings(record.tokens),
        store,
        deduplicator=Deduplicator(store, timeout=settings.dedup_timeout),
        pacer=FixedIntervalPacer(settings.batch_delay),
    )
    report = await orchestrator.run_batch(resume_ids, allow_paid_unlock=allow_paid_unlock)
    print_report(report)
    return 0 if report.errors == 0 else 2


def main():
    """Run a batch sync from the command line."""
    print("HH → Airtable sync")
    print("=" * 40)

    args = sys.argv[1:]
    allow_paid_unlock = "--paid" in args
    resume_ids = [a for a in args if not a.startswith("--")]

    if not resume_ids:
        print(__doc__)
        sys.exit(1)

    logging.basicConfig(level=settings.log_level.upper())
    print(f"Syncing {len(resume_ids)} resumes (paid unlock: {'on' if allow_paid_unlock else 'off'})")
    sys.exit(asyncio.run(run(resume_ids, allow_paid_unlock)))


if __name__ == "__main__":
    main()
