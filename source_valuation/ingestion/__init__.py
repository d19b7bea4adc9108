"""
Ingestion layer — loads source-attribution payloads from disk.

Submodules:
  source_json — JSON loader accepting bare arrays and API envelopes
"""
