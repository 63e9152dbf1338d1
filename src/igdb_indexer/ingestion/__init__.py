"""
Ingestion — catalog paging and the per-record embedding pipeline.

This module covers everything between the IGDB metadata API and the
vector store: pages of game records are fetched and queued, and each
queued record is split into sentence chunks, embedded, and upserted.
"""
