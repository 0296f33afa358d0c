"""
HH → Airtable bridge.

Core components:
- session: token persistence and per-request token resolution
- tools: HeadHunter OAuth/resume clients, Airtable client
- sync: query building, contact resolution, dedup, mapping, orchestration
- api: FastAPI application
"""
