"""Resume → Airtable row mapping for the People table."""

from datetime import date

from hh_airtable.models import ResumeDetail

NAME_FIELD = "Name"
EMAIL_FIELD = "Email"
PHONE_FIELD = "Phone number"
URL_FIELD = "resume_url"

DEFAULT_NAME = "Без имени"
DEFAULT_CURRENCY = "RUR"
HIRING_STATUS = "Candidate"


def _full_name(resume: ResumeDetail) -> str:
    name = " ".join(p for p in (resume.last_name, resume.first_name, resume.middle_name) if p).strip()
    return name or DEFAULT_NAME


def _education(resume: ResumeDetail) -> str:
    if not resume.education or not resume.education.primary:
        return ""
    first = resume.education.primary[0]
    return f"{first.name or ''} - {first.organization or ''}"


def map_resume(resume: ResumeDetail, today: date | None = None) -> dict:
    """
    Build the store row for a resume.

    The key set never depends on what the resume contains; absent values
    fall back to fixed defaults. Only updated_at depends on `today`.
    """
    salary = resume.salary
    return {
        NAME_FIELD: _full_name(resume),
        "Job_Title": resume.title or "",
        EMAIL_FIELD: resume.email,
        PHONE_FIELD: resume.phone,
        URL_FIELD: resume.profile_url,
        "area": resume.area.name if resume.area else "",
        "salary_amount": (salary.amount or 0) if salary else 0,
        "salary_currency": (salary.currency or DEFAULT_CURRENCY) if salary else DEFAULT_CURRENCY,
        "experience_months": resume.total_experience_months,
        "age": resume.age or 0,
        "last_employer": (resume.experience[0].company or "") if resume.experience else "",
        "education": _education(resume),
        "skills": ", ".join(resume.skill_set),
        "updated_at": (today or date.today()).isoformat(),
        "Hiring Status": HIRING_STATUS,
    }
