"""Stable identifiers of the built-in audit checks."""

from enum import Enum


class AuditId(str, Enum):
    """Kebab-case ids; remediation sections are keyed by the same values."""

    ALERTS = "alerts"
    TV_MAPPING = "tv-mapping"
    GOLDEN = "golden"
    UNMAPPED_PAIRS = "unmapped-pairs"
    REVERSE_GOLDEN = "reverse-golden"
    INTEGRITY = "integrity"
    DUPLICATE_PAIR_IDS = "duplicate-pair-ids"
    TICKER_COLLISION = "ticker-collision"
    ORPHAN_ALERTS = "orphan-alerts"
    ORPHAN_SEQUENCES = "orphan-sequences"
    ORPHAN_FLAGS = "orphan-flags"
    ORPHAN_EXCHANGE = "orphan-exchange"
    GTT_UNWATCHED = "gtt-unwatched"
    TRADE_RISK = "trade-risk"
    STALE_REVIEW = "stale-review"


__all__ = ["AuditId"]
