"""
Duplicate detection against the record store.

Best-effort and time-bounded: the lookup runs under its own timeout and any
failure resolves to "not a duplicate" so a flaky store never blocks a save.
The status on DuplicateCheck tells which branch produced the answer.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from hh_airtable.models import ResumeDetail
from hh_airtable.sync.field_mapper import EMAIL_FIELD, PHONE_FIELD, URL_FIELD

if TYPE_CHECKING:
    from hh_airtable.tools.airtable import AirtableClient

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0

DuplicateStatus = Literal["duplicate", "not_duplicate", "no_keys", "check_failed"]


@dataclass
class DuplicateCheck:
    status: DuplicateStatus
    error: str | None = None

    @property
    def is_duplicate(self) -> bool:
        return self.status == "duplicate"


def quote_formula_string(value: str) -> str:
    """Single-quoted Airtable formula literal."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def identity_keys(resume: ResumeDetail) -> dict[str, str]:
    """Store field -> value for every non-empty identity key on the resume."""
    keys = {
        EMAIL_FIELD: resume.email,
        PHONE_FIELD: resume.phone,
        URL_FIELD: resume.profile_url,
    }
    return {field: value for field, value in keys.items() if value}


def build_formula(keys: dict[str, str]) -> str:
    conditions = [f"{{{field}}}={quote_formula_string(value)}" for field, value in keys.items()]
    return f"OR({', '.join(conditions)})"


class Deduplicator:
    def __init__(self, store: "AirtableClient", timeout: float = DEFAULT_TIMEOUT):
        self.store = store
        self.timeout = timeout

    async def check(self, resume: ResumeDetail) -> DuplicateCheck:
        keys = identity_keys(resume)
        if not keys:
            return DuplicateCheck("no_keys")

        formula = build_formula(keys)
        try:
            match = await asyncio.wait_for(self.store.find_first(formula), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"[{resume.id}] Duplicate check timed out after {self.timeout}s, assuming new")
            return DuplicateCheck("check_failed", error=f"timeout after {self.timeout}s")
        except Exception as e:
            logger.warning(f"[{resume.id}] Duplicate check failed, assuming new: {e}")
            return DuplicateCheck("check_failed", error=str(e) or type(e).__name__)

        if match is not None:
            return DuplicateCheck("duplicate")
        return DuplicateCheck("not_duplicate")

    async def is_duplicate(self, resume: ResumeDetail) -> bool:
        return (await self.check(resume)).is_duplicate
