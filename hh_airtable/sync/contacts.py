"""
Contact resolution.

Decides whether a resume's contacts are already visible or need a paid
unlock, and performs the unlock when the caller allows it.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from hh_airtable.errors import ContactsUnavailable
from hh_airtable.models import ResumeDetail

if TYPE_CHECKING:
    from hh_airtable.tools.hh_resumes import ResumeClient

logger = logging.getLogger(__name__)

ResolutionBranch = Literal["free", "unlocked", "unlock_failed", "unavailable"]


@dataclass
class ContactResolution:
    resume: ResumeDetail
    had_free_contacts: bool
    paid_unlock_performed: bool
    branch: ResolutionBranch
    error: str | None = None


class ContactResolver:
    def __init__(self, client: "ResumeClient"):
        self.client = client

    async def unlock(self, resume: ResumeDetail) -> ResumeDetail:
        """Paid unlock for a single resume. Errors propagate to the caller."""
        action = resume.paid_unlock_action
        if action is None:
            raise ContactsUnavailable("Нет доступа к контактам этого резюме")
        logger.info(f"[{resume.id}] Opening paid contacts")
        return await self.client.open_contacts(action)

    async def resolve(self, resume: ResumeDetail, allow_paid_unlock: bool) -> ContactResolution:
        if resume.contacts:
            return ContactResolution(resume, True, False, "free")

        if not allow_paid_unlock or resume.paid_unlock_action is None:
            return ContactResolution(resume, False, False, "unavailable")

        try:
            enriched = await self.unlock(resume)
        except Exception as e:
            logger.warning(f"[{resume.id}] Paid unlock failed, saving without contacts: {e}")
            return ContactResolution(resume, False, False, "unlock_failed", error=str(e))

        return ContactResolution(enriched, False, True, "unlocked")
