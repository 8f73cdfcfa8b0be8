"""WaniKani API access: client, rate limiter and vocabulary sources."""

from wksync.wanikani.limiter import RateLimiter
from wksync.wanikani.client import WaniKaniClient
from wksync.wanikani.vocab import (
    get_vocabulary,
    get_unburned_vocabulary,
    vocabulary_map,
    get_vocab_map,
)

__all__ = [
    "RateLimiter",
    "WaniKaniClient",
    "get_vocabulary",
    "get_unburned_vocabulary",
    "vocabulary_map",
    "get_vocab_map",
]
