"""
Sync pipeline.

- query_builder: SearchCriteria -> provider query parameters
- contacts: free vs paid-unlock contact resolution
- dedup: time-bounded duplicate check against the store
- field_mapper: resume -> store row
- pacing: delay policies for the batch loop
- orchestrator: single and batch save flows
"""
