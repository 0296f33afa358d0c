"""Shared fixtures: provider payloads, fake clients and mock transports."""

import copy

import httpx
import pytest

from hh_airtable.errors import UpstreamError
from hh_airtable.models import ResumeDetail, Token, UnlockAction

BASE_RESUME = {
    "id": "a1b2c3",
    "title": "Инженер-конструктор",
    "first_name": "Иван",
    "last_name": "Петров",
    "middle_name": "Сергеевич",
    "area": {"id": "1", "name": "Москва"},
    "age": 34,
    "salary": {"amount": 150000, "currency": "RUR"},
    "total_experience": {"months": 98},
    "alternate_url": "https://hh.ru/resume/a1b2c3",
    "contact": [
        {
            "type": {"id": "cell", "name": "Мобильный телефон"},
            "value": {"country": "7", "city": "916", "number": "1234567", "formatted": "+7 (916) 123-45-67"},
            "preferred": True,
        },
        {"type": {"id": "email", "name": "Эл. почта"}, "value": "petrov@example.com"},
    ],
    "experience": [
        {"company": "ООО Техпром", "position": "Ведущий инженер", "start": "2019-01-01", "end": None},
        {"company": "АО Машзавод", "position": "Инженер", "start": "2015-06-01", "end": "2018-12-01"},
    ],
    "education": {
        "level": {"id": "higher", "name": "Высшее"},
        "primary": [{"name": "МГТУ им. Баумана", "organization": "Машиностроение", "year": 2012}],
    },
    "skill_set": ["AutoCAD", "SolidWorks", "Компас-3D"],
    "actions": None,
}


def resume_payload(**overrides) -> dict:
    """Provider-shaped resume dict with fields replaced by overrides."""
    data = copy.deepcopy(BASE_RESUME)
    data.update(overrides)
    return data


def gated_payload(resume_id: str = "gated1", **overrides) -> dict:
    """A resume whose contacts are hidden behind a paid unlock."""
    return resume_payload(
        id=resume_id,
        contact=[],
        alternate_url=f"https://hh.ru/resume/{resume_id}",
        actions={"get_with_contact": {"url": f"https://api.hh.ru/resumes/{resume_id}?with_contact=true"}},
        **overrides,
    )


@pytest.fixture
def token() -> Token:
    return Token(access_token="access-123", refresh_token="refresh-456", expires_in=1209600)


@pytest.fixture
def resume() -> ResumeDetail:
    return ResumeDetail.model_validate(resume_payload())


def mock_transport(handler) -> httpx.MockTransport:
    return httpx.MockTransport(handler)


class FakeResumeClient:
    """In-memory stand-in for ResumeClient, recording every call."""

    def __init__(self, resumes: dict | None = None, unlocked: dict | None = None, unlock_error: Exception | None = None):
        self.resumes = resumes or {}
        self.unlocked = unlocked or {}
        self.unlock_error = unlock_error
        self.calls: list[tuple[str, str]] = []

    async def get_detail(self, resume_id: str) -> ResumeDetail:
        self.calls.append(("get_detail", resume_id))
        value = self.resumes.get(resume_id)
        if value is None:
            raise UpstreamError("hh", 404)
        if isinstance(value, Exception):
            raise value
        return ResumeDetail.model_validate(value)

    async def open_contacts(self, action: UnlockAction) -> ResumeDetail:
        self.calls.append(("open_contacts", action.url))
        if self.unlock_error:
            raise self.unlock_error
        return ResumeDetail.model_validate(self.unlocked[action.url])


class FakeStore:
    """In-memory stand-in for AirtableClient."""

    def __init__(self, existing: list[dict] | None = None, insert_error: Exception | None = None):
        self.existing = existing or []
        self.insert_error = insert_error
        self.inserted: list[dict] = []
        self.formulas: list[str] = []

    async def find_first(self, formula: str) -> dict | None:
        self.formulas.append(formula)
        for fields in self.existing:
            if any(f"'{value}'" in formula for value in fields.values() if value):
                return {"id": "recExisting", "fields": fields}
        return None

    async def create_records(self, records: list[dict]) -> list[str]:
        if self.insert_error:
            raise self.insert_error
        self.inserted.extend(records)
        return [f"rec{len(self.inserted)}" for _ in records]
