"""
Serving — FastAPI front door that triggers the catalog backfill.
"""
