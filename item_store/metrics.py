"""
Prometheus counters for the translation cache (exposed at /metrics by item_store.main).
"""

from prometheus_client import Counter

CACHE_LOOKUPS = Counter(
    "translation_cache_lookups_total",
    "Translation cache lookups by outcome",
    ["result"],  # hit | fallback_hit | miss | source
)

CACHE_WRITES = Counter(
    "translation_cache_writes_total",
    "Translation cache writes by the tier that succeeded, or failed when none did",
    ["tier"],
)
