"""Tubely video asset service.

Accepts thumbnail and video uploads for owned video records, stores the bytes
through the storage backend configured for each slot and points the record at
the resulting URL.
"""
