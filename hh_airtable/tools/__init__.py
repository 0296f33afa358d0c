"""
Clients for external services.

- hh_oauth: HeadHunter authorization-code exchange and identity
- hh_resumes: HeadHunter resume search, detail and contact unlock
- airtable: Airtable bulk insert and filtered lookup
"""

from hh_airtable.tools.airtable import AirtableClient
from hh_airtable.tools.hh_oauth import OAuthExchanger
from hh_airtable.tools.hh_resumes import ResumeClient

__all__ = ["OAuthExchanger", "ResumeClient", "AirtableClient"]
