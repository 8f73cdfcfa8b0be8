"""WaniKani synonym sync library.

Subpackages:
- wksync.common: Shared utilities (config, errors, logging, progress, utils)
- wksync.input: Dictionary ingestion (EDICT2 parsing and condensing)
- wksync.output: Translation table building, artifacts and study-material sync
- wksync.schema: Data types (local records and validated WaniKani payloads)
- wksync.wanikani: WaniKani API client, rate limiter and vocabulary sources
"""
