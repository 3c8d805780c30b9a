"""
Finding model shared by every audit check.

An ``AuditResult`` is one finding: which check produced it, what it is
about (``target``), how bad it is, and a typed payload the remediation UI
reads. Results are ephemeral. They are built fresh on every ``run()``,
never persisted, and compare equal when all their fields do.

Manifesto:
    Remediation code branches on ``code`` and then reads ``data``. Instead
    of an untyped dict, ``data`` is a tagged union: one frozen dataclass per
    check family, and ``AuditResult`` refuses a payload whose type does not
    match its code. A typo in a remediation handler fails at the attribute
    access, not three screens later.

Architecture:
    ::

        AuditResult(plugin_id, code, target, message, severity, status, data)
                                 │
                                 └── FindingCode ──→ payload type
                                     NO_PAIR / NO_ALERTS / SINGLE_ALERT → AlertCoverageData
                                     NO_TV_MAPPING          → MissingMappingData
                                     DUPLICATE_PAIR_ID      → DuplicatePairIdData
                                     TICKER_COLLISION       → TickerCollisionData
                                     NO_PAIR_MAPPING        → OrphanAlertData
                                     ORPHAN_SEQUENCE        → OrphanSequenceData
                                     ORPHAN_FLAG            → OrphanFlagData
                                     ORPHAN_EXCHANGE        → OrphanExchangeData
                                     UNWATCHED_GTT          → UnwatchedOrderData
                                     INVALID_RISK_MULTIPLE  → RiskMultipleData
                                     STALE_TICKER           → StaleTickerData

Examples:
    >>> result = AuditResult(
    ...     plugin_id="duplicate-pair-ids",
    ...     code=FindingCode.DUPLICATE_PAIR_ID,
    ...     target="18462",
    ...     message="Voltas (18462): shared by VOLTAS, VOLT",
    ...     severity=Severity.MEDIUM,
    ...     data=DuplicatePairIdData("18462", ("VOLTAS", "VOLT"), "Voltas"),
    ... )
    >>> result.status
    <Status.FAIL: 'FAIL'>
    >>> result.data.investing_tickers
    ('VOLTAS', 'VOLT')

Tags:
    audit, finding, tagged-union, dataclass, tickerspine
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Union


class Severity(str, Enum):
    """Finding severity, ordered LOW < MEDIUM < HIGH."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    def _rank(self) -> int:
        return _SEVERITY_ORDER.index(self)

    def __lt__(self, other: Severity) -> bool:
        return self._rank() < other._rank()

    def __le__(self, other: Severity) -> bool:
        return self._rank() <= other._rank()

    def __gt__(self, other: Severity) -> bool:
        return self._rank() > other._rank()

    def __ge__(self, other: Severity) -> bool:
        return self._rank() >= other._rank()


_SEVERITY_ORDER = [Severity.LOW, Severity.MEDIUM, Severity.HIGH]


class Status(str, Enum):
    """Outcome for one target. Checks only emit FAIL; PASS is implicit."""

    PASS = "PASS"
    FAIL = "FAIL"


class FindingCode(str, Enum):
    """Classification codes emitted by the checks."""

    # Alert coverage
    NO_PAIR = "NO_PAIR"
    NO_ALERTS = "NO_ALERTS"
    SINGLE_ALERT = "SINGLE_ALERT"

    # Existence
    NO_TV_MAPPING = "NO_TV_MAPPING"

    # Duplicate groups
    DUPLICATE_PAIR_ID = "DUPLICATE_PAIR_ID"
    TICKER_COLLISION = "TICKER_COLLISION"

    # Orphans
    NO_PAIR_MAPPING = "NO_PAIR_MAPPING"
    ORPHAN_SEQUENCE = "ORPHAN_SEQUENCE"
    ORPHAN_FLAG = "ORPHAN_FLAG"
    ORPHAN_EXCHANGE = "ORPHAN_EXCHANGE"

    # Orders
    UNWATCHED_GTT = "UNWATCHED_GTT"
    INVALID_RISK_MULTIPLE = "INVALID_RISK_MULTIPLE"

    # Staleness
    STALE_TICKER = "STALE_TICKER"


# =============================================================================
# RANKING RECORD
# =============================================================================


@dataclass(frozen=True)
class RankedAlias:
    """Canonical ranker output for one candidate alias."""

    ticker: str
    score: int
    alert_count: int
    is_watched: bool
    recent_timestamp: int
    has_sequence: bool
    has_exchange: bool
    has_pair_mapping: bool
    is_encoded: bool = False


# =============================================================================
# PAYLOADS
# =============================================================================


@dataclass(frozen=True)
class AlertCoverageData:
    investing_ticker: str
    tv_ticker: str | None
    alert_count: int | None  # None when the ticker has no pair record


@dataclass(frozen=True)
class MissingMappingData:
    investing_ticker: str
    pair_id: str | None


@dataclass(frozen=True)
class DuplicatePairIdData:
    """Several vendor tickers share one pairId."""

    pair_id: str
    investing_tickers: tuple[str, ...]
    pair_name: str
    ranked: tuple[RankedAlias, ...] = ()


@dataclass(frozen=True)
class TickerCollisionData:
    """Several charting tickers reverse-map to one vendor ticker."""

    investing_ticker: str
    tv_tickers: tuple[str, ...]
    ranked: tuple[RankedAlias, ...] = ()


@dataclass(frozen=True)
class OrphanAlertData:
    pair_id: str
    alert_name: str
    alert_count: int


@dataclass(frozen=True)
class OrphanSequenceData:
    ticker: str
    sequence: str | None


@dataclass(frozen=True)
class OrphanFlagData:
    ticker: str
    category_index: int


@dataclass(frozen=True)
class OrphanExchangeData:
    tv_ticker: str
    exchange_value: str | None


@dataclass(frozen=True)
class UnwatchedOrderData:
    tv_ticker: str
    order_ids: tuple[str, ...]
    categories: tuple[int, ...]


@dataclass(frozen=True)
class RiskMultipleData:
    tv_ticker: str
    order_id: str
    order_ids: tuple[str, ...]  # (entry order, stop/target order)
    entry: float
    stop: float
    quantity: int
    computed_risk: float
    expected_multiples: tuple[float, ...]


@dataclass(frozen=True)
class StaleTickerData:
    tv_ticker: str
    last_opened: int  # epoch ms, 0 when never opened
    days_since_open: int  # -1 when never opened


FindingData = Union[
    AlertCoverageData,
    MissingMappingData,
    DuplicatePairIdData,
    TickerCollisionData,
    OrphanAlertData,
    OrphanSequenceData,
    OrphanFlagData,
    OrphanExchangeData,
    UnwatchedOrderData,
    RiskMultipleData,
    StaleTickerData,
]

PAYLOAD_TYPES: dict[FindingCode, type] = {
    FindingCode.NO_PAIR: AlertCoverageData,
    FindingCode.NO_ALERTS: AlertCoverageData,
    FindingCode.SINGLE_ALERT: AlertCoverageData,
    FindingCode.NO_TV_MAPPING: MissingMappingData,
    FindingCode.DUPLICATE_PAIR_ID: DuplicatePairIdData,
    FindingCode.TICKER_COLLISION: TickerCollisionData,
    FindingCode.NO_PAIR_MAPPING: OrphanAlertData,
    FindingCode.ORPHAN_SEQUENCE: OrphanSequenceData,
    FindingCode.ORPHAN_FLAG: OrphanFlagData,
    FindingCode.ORPHAN_EXCHANGE: OrphanExchangeData,
    FindingCode.UNWATCHED_GTT: UnwatchedOrderData,
    FindingCode.INVALID_RISK_MULTIPLE: RiskMultipleData,
    FindingCode.STALE_TICKER: StaleTickerData,
}


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class AuditResult:
    """
    One finding emitted by a check.

    Attributes:
        plugin_id: Id of the check that produced the finding
        code: Classification code; selects the payload type
        target: Identifier the remediation UI acts on
        message: Human-readable description
        severity: LOW, MEDIUM or HIGH
        status: FAIL for every emitted finding
        data: Code-specific payload
    """

    plugin_id: str
    code: FindingCode
    target: str
    message: str
    severity: Severity
    status: Status = Status.FAIL
    data: FindingData | None = field(default=None)

    def __post_init__(self) -> None:
        if self.data is not None:
            expected = PAYLOAD_TYPES[self.code]
            if not isinstance(self.data, expected):
                raise TypeError(
                    f"{self.code.value} findings carry {expected.__name__}, "
                    f"got {type(self.data).__name__}"
                )

    def to_dict(self) -> dict[str, Any]:
        """Plain dict for logging and UI transport."""
        result: dict[str, Any] = {
            "plugin_id": self.plugin_id,
            "code": self.code.value,
            "target": self.target,
            "message": self.message,
            "severity": self.severity.value,
            "status": self.status.value,
        }
        if self.data is not None:
            result["data"] = asdict(self.data)
        return result


__all__ = [
    "Severity",
    "Status",
    "FindingCode",
    "RankedAlias",
    "AlertCoverageData",
    "MissingMappingData",
    "DuplicatePairIdData",
    "TickerCollisionData",
    "OrphanAlertData",
    "OrphanSequenceData",
    "OrphanFlagData",
    "OrphanExchangeData",
    "UnwatchedOrderData",
    "RiskMultipleData",
    "StaleTickerData",
    "FindingData",
    "PAYLOAD_TYPES",
    "AuditResult",
]
