"""
Sync orchestrator.

Drives resumes from the provider into the store, one at a time:

    get_detail ─► duplicate check ─┬─► Duplicate
                                   └─► resolve contacts ─► map ─► insert ─► Saved
    (any stage raising) ─► Failed

Batches run strictly sequentially with a Pacer between items to stay under
provider and store rate limits. Never parallelize this loop.
"""

import logging
from collections.abc import Callable
from datetime import date
from typing import TYPE_CHECKING

from hh_airtable.models import SyncOutcome, SyncReport
from hh_airtable.sync.contacts import ContactResolver
from hh_airtable.sync.dedup import Deduplicator
from hh_airtable.sync.field_mapper import map_resume
from hh_airtable.sync.pacing import NullPacer, Pacer

if TYPE_CHECKING:
    from hh_airtable.tools.airtable import AirtableClient
    from hh_airtable.tools.hh_resumes import ResumeClient

logger = logging.getLogger(__name__)

# Per-item pipeline states
FETCHING = "fetching"
FETCHED = "fetched"
CONTACT_RESOLVED = "contact_resolved"
MAPPED = "mapped"


class SyncOrchestrator:
    def __init__(
        self,
        client: "ResumeClient",
        store: "AirtableClient",
        deduplicator: Deduplicator | None = None,
        resolver: ContactResolver | None = None,
        pacer: Pacer | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.client = client
        self.store = store
        self.deduplicator = deduplicator or Deduplicator(store)
        self.resolver = resolver or ContactResolver(client)
        self.pacer = pacer or NullPacer()
        self.today = today

    async def save_one(self, resume_id: str, allow_paid_unlock: bool = False) -> SyncOutcome:
        """Run one resume through the pipeline. Never raises."""
        state = FETCHING
        try:
            resume = await self.client.get_detail(resume_id)
            state = FETCHED

            check = await self.deduplicator.check(resume)
            if check.is_duplicate:
                logger.info(f"[{resume_id}] Already in store, skipping")
                return SyncOutcome.duplicate(resume_id)

            resolution = await self.resolver.resolve(resume, allow_paid_unlock)
            state = CONTACT_RESOLVED

            fields = map_resume(resolution.resume, today=self.today())
            state = MAPPED

            record_ids = await self.store.create_records([fields])
        except Exception as e:
            reason = str(e) or type(e).__name__
            logger.error(f"[{resume_id}] Sync failed after '{state}': {reason}")
            return SyncOutcome.failed(resume_id, reason, stage=state)

        logger.info(
            f"[{resume_id}] Saved (free contacts: {resolution.had_free_contacts}, "
            f"paid unlock: {resolution.paid_unlock_performed})"
        )
        return SyncOutcome.saved(
            resume_id,
            had_free_contacts=resolution.had_free_contacts,
            paid=resolution.paid_unlock_performed,
            record_id=record_ids[0] if record_ids else None,
        )

    async def run_batch(self, resume_ids: list[str], allow_paid_unlock: bool = False) -> SyncReport:
        """Save every id in order, pacing between items. One item's failure never stops the rest."""
        report = SyncReport()
        logger.info(f"Batch started: {len(resume_ids)} resumes, paid unlock={allow_paid_unlock}")

        for index, resume_id in enumerate(resume_ids):
            outcome = await self.save_one(resume_id, allow_paid_unlock)
            report.record(outcome)

            if index < len(resume_ids) - 1:
                await self.pacer.wait()

        logger.info(
            f"Batch finished: {report.saved} saved, {report.duplicates} duplicates, "
            f"{report.errors} errors of {report.total}"
        )
        return report
