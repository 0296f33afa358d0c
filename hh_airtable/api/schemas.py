"""API request/response schemas."""

from pydantic import BaseModel, Field

from hh_airtable.models import ResumeDetail, UserIdentity


# Landing
class LandingResponse(BaseModel):
    authenticated: bool
    user: UserIdentity | None = None
    error: str | None = None


# Resume schemas
class ResumeIdRequest(BaseModel):
    resume_id: str = Field(alias="resumeId", min_length=1)

    class Config:
        populate_by_name = True


class ResumeResponse(BaseModel):
    resume: ResumeDetail
    can_view_contacts: bool
    has_contacts: bool
    contacts_unlocked: bool = False


# Save schemas
class SaveResumeRequest(BaseModel):
    resume_id: str = Field(alias="resumeId", min_length=1)
    open_paid_contacts: bool = Field(default=False, alias="openPaidContacts")

    class Config:
        populate_by_name = True


class SaveResumeResponse(BaseModel):
    success: bool
    is_duplicate: bool | None = Field(default=None, alias="isDuplicate")
    paid_contact_opened: bool | None = Field(default=None, alias="paidContactOpened")
    had_free_contacts: bool | None = Field(default=None, alias="hadFreeContacts")
    error: str | None = None

    class Config:
        populate_by_name = True


class BatchSaveRequest(BaseModel):
    resume_ids: list[str] = Field(alias="resumeIds", min_length=1, max_length=100)
    open_paid_contacts: bool = Field(default=False, alias="openPaidContacts")

    class Config:
        populate_by_name = True
