"""Domain models: tokens, sessions, search criteria, resumes and sync outcomes.

Resume models mirror the provider's JSON shape so payloads can be validated
as they arrive; convenience properties expose the flattened values the sync
pipeline works with.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

ContactKind = Literal["email", "phone", "other"]
SearchField = Literal["all", "title", "experience"]
ExperienceBand = Literal["noExperience", "between1And3", "between3And6", "moreThan6"]

PHONE_CONTACT_TYPES = {"cell", "home"}


# Auth / session
class Token(BaseModel):
    access_token: str = ""
    refresh_token: str | None = None
    expires_in: int | None = None
    token_type: str = "bearer"
    obtained_at: datetime | None = None

    class Config:
        extra = "ignore"

    @property
    def is_usable(self) -> bool:
        return bool(self.access_token)


class UserIdentity(BaseModel):
    email: str | None = None
    employer: str | None = None
    employer_id: str | None = Field(default=None, alias="employerId")
    is_employer: bool = Field(default=False, alias="isEmployer")

    class Config:
        populate_by_name = True


class PersistedSession(BaseModel):
    """The single durable session record: ``{tokens, userInfo, savedAt}``."""

    tokens: Token
    user_info: UserIdentity | None = Field(default=None, alias="userInfo")
    saved_at: datetime | None = Field(default=None, alias="savedAt")

    class Config:
        populate_by_name = True


# Search
class SearchCriteria(BaseModel):
    text: str = ""
    area: str = "1"
    experience: ExperienceBand | None = None
    salary_from: int | None = None
    per_page: int = Field(default=20, ge=1, le=100)
    page: int = Field(default=0, ge=0)
    must_have_skills: list[str] = Field(default_factory=list)
    nice_to_have_skills: list[str] = Field(default_factory=list)
    excluded_words: list[str] = Field(default_factory=list)
    search_field: SearchField = "all"
    exact_phrase: bool = False
    updated_within_days: int | None = Field(default=None, ge=0)


# Resumes (provider shape)
class Area(BaseModel):
    id: str | None = None
    name: str = ""


class Salary(BaseModel):
    amount: int | None = None
    currency: str | None = None


class TotalExperience(BaseModel):
    months: int = 0


class ContactType(BaseModel):
    id: str = ""
    name: str | None = None


class PhoneValue(BaseModel):
    country: str | None = None
    city: str | None = None
    number: str | None = None
    formatted: str | None = None


class Contact(BaseModel):
    type: ContactType
    value: str | PhoneValue
    preferred: bool = False

    @property
    def kind(self) -> ContactKind:
        if self.type.id == "email":
            return "email"
        if self.type.id in PHONE_CONTACT_TYPES:
            return "phone"
        return "other"

    @property
    def text(self) -> str:
        """Display value, preferring the provider's formatted phone."""
        if isinstance(self.value, PhoneValue):
            if self.value.formatted:
                return self.value.formatted
            return "".join(p for p in (self.value.country, self.value.city, self.value.number) if p)
        return self.value


class ExperienceEntry(BaseModel):
    company: str | None = None
    position: str | None = None
    start: str | None = None
    end: str | None = None
    description: str | None = None


class EducationEntry(BaseModel):
    name: str | None = None
    organization: str | None = None
    result: str | None = None
    year: int | None = None


class Education(BaseModel):
    level: dict | None = None
    primary: list[EducationEntry] = Field(default_factory=list)

    @field_validator("primary", mode="before")
    @classmethod
    def _none_to_list(cls, v):
        return v or []


class UnlockAction(BaseModel):
    url: str
    method: str = "GET"


class ResumeActions(BaseModel):
    get_with_contact: UnlockAction | None = None


class ResumeSummary(BaseModel):
    id: str
    title: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    middle_name: str | None = None
    area: Area | None = None
    age: int | None = None
    salary: Salary | None = None
    total_experience: TotalExperience | None = None
    alternate_url: str | None = None

    class Config:
        extra = "ignore"

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v):
        return str(v) if isinstance(v, int) else v

    @property
    def profile_url(self) -> str:
        return self.alternate_url or ""

    @property
    def total_experience_months(self) -> int:
        return self.total_experience.months if self.total_experience else 0


class ResumeDetail(ResumeSummary):
    contact: list[Contact] = Field(default_factory=list)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: Education | None = None
    skill_set: list[str] = Field(default_factory=list)
    actions: ResumeActions | None = None

    @field_validator("contact", "experience", "skill_set", mode="before")
    @classmethod
    def _none_to_list(cls, v):
        return v or []

    @property
    def contacts(self) -> list[Contact]:
        return self.contact

    @property
    def paid_unlock_action(self) -> UnlockAction | None:
        return self.actions.get_with_contact if self.actions else None

    def last_contact(self, kind: ContactKind) -> str:
        """Value of the last non-empty contact of this kind; later entries win."""
        found = ""
        for contact in self.contact:
            if contact.kind == kind and contact.text:
                found = contact.text
        return found

    @property
    def email(self) -> str:
        return self.last_contact("email")

    @property
    def phone(self) -> str:
        return self.last_contact("phone")


class SearchResult(BaseModel):
    found: int = 0
    items: list[ResumeSummary] = Field(default_factory=list)
    page: int = 0
    pages: int = 0
    per_page: int = 20


# Sync results
class SyncOutcome(BaseModel):
    """Terminal result of one resume's trip through the pipeline."""

    resume_id: str
    status: Literal["saved", "duplicate", "failed"]
    with_contacts: bool = False
    paid: bool = False
    had_free_contacts: bool = False
    record_id: str | None = None
    reason: str | None = None
    stage: str | None = None

    @classmethod
    def saved(cls, resume_id: str, *, had_free_contacts: bool, paid: bool, record_id: str | None = None):
        return cls(
            resume_id=resume_id,
            status="saved",
            with_contacts=had_free_contacts or paid,
            paid=paid,
            had_free_contacts=had_free_contacts,
            record_id=record_id,
        )

    @classmethod
    def duplicate(cls, resume_id: str):
        return cls(resume_id=resume_id, status="duplicate")

    @classmethod
    def failed(cls, resume_id: str, reason: str, stage: str | None = None):
        return cls(resume_id=resume_id, status="failed", reason=reason, stage=stage)


class SyncReport(BaseModel):
    total: int = 0
    saved: int = 0
    duplicates: int = 0
    paid_unlocked: int = 0
    saved_with_free_contacts: int = 0
    saved_without_contacts: int = 0
    errors: int = 0
    outcomes: list[SyncOutcome] = Field(default_factory=list)

    def record(self, outcome: SyncOutcome) -> None:
        """Tally one item's outcome."""
        self.total += 1
        self.outcomes.append(outcome)
        if outcome.status == "duplicate":
            self.duplicates += 1
        elif outcome.status == "failed":
            self.errors += 1
        else:
            self.saved += 1
            if outcome.paid:
                self.paid_unlocked += 1
            elif outcome.had_free_contacts:
                self.saved_with_free_contacts += 1
            else:
                self.saved_without_contacts += 1
