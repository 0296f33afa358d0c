import pytest

from conftest import FakeResumeClient, gated_payload, resume_payload
from hh_airtable.errors import ContactsUnavailable, UpstreamError
from hh_airtable.models import ResumeDetail
from hh_airtable.sync.contacts import ContactResolver

UNLOCK_URL = "https://api.hh.ru/resumes/gated1?with_contact=true"


@pytest.mark.asyncio
@pytest.mark.parametrize("allow", [True, False])
async def test_free_contacts_never_unlock(allow):
    client = FakeResumeClient()
    resume = ResumeDetail.model_validate(
        resume_payload(actions={"get_with_contact": {"url": UNLOCK_URL}})
    )

    result = await ContactResolver(client).resolve(resume, allow_paid_unlock=allow)

    assert result.had_free_contacts is True
    assert result.paid_unlock_performed is False
    assert result.branch == "free"
    assert result.resume is resume
    assert client.calls == []


@pytest.mark.asyncio
async def test_no_contacts_and_not_allowed_is_unchanged():
    client = FakeResumeClient()
    resume = ResumeDetail.model_validate(gated_payload())

    result = await ContactResolver(client).resolve(resume, allow_paid_unlock=False)

    assert result.resume is resume
    assert (result.had_free_contacts, result.paid_unlock_performed) == (False, False)
    assert result.branch == "unavailable"
    assert client.calls == []


@pytest.mark.asyncio
async def test_no_action_means_unavailable_even_when_allowed():
    resume = ResumeDetail.model_validate(resume_payload(contact=[], actions=None))

    result = await ContactResolver(FakeResumeClient()).resolve(resume, allow_paid_unlock=True)

    assert result.branch == "unavailable"


@pytest.mark.asyncio
async def test_paid_unlock_replaces_resume():
    client = FakeResumeClient(unlocked={UNLOCK_URL: resume_payload(id="gated1")})
    resume = ResumeDetail.model_validate(gated_payload())

    result = await ContactResolver(client).resolve(resume, allow_paid_unlock=True)

    assert result.paid_unlock_performed is True
    assert result.had_free_contacts is False
    assert result.branch == "unlocked"
    assert result.resume.email == "petrov@example.com"
    assert client.calls == [("open_contacts", UNLOCK_URL)]


@pytest.mark.asyncio
async def test_failed_unlock_falls_back_to_original():
    client = FakeResumeClient(unlock_error=UpstreamError("hh", 403))
    resume = ResumeDetail.model_validate(gated_payload())

    result = await ContactResolver(client).resolve(resume, allow_paid_unlock=True)

    assert result.resume is resume
    assert (result.had_free_contacts, result.paid_unlock_performed) == (False, False)
    assert result.branch == "unlock_failed"
    assert "403" in result.error


@pytest.mark.asyncio
async def test_direct_unlock_without_action_raises():
    resume = ResumeDetail.model_validate(resume_payload(contact=[], actions=None))

    with pytest.raises(ContactsUnavailable):
        await ContactResolver(FakeResumeClient()).unlock(resume)
