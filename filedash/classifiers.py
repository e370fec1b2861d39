#classifiers.py
from enum import Enum
from typing import NamedTuple, Optional


class RiskTier(str, Enum):
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    UNKNOWN = "Unknown"


class StatusTier(str, Enum):
    COMPLETE = "Complete"
    PARTIAL = "Partial"
    PENDING = "Pending"


# Презентационный слой: tier -> CSS классы
RISK_STYLES = {
    RiskTier.CRITICAL: "bg-red-900 text-white",
    RiskTier.HIGH: "bg-red-500 text-white",
    RiskTier.MEDIUM: "bg-yellow-500 text-black",
    RiskTier.LOW: "bg-green-500 text-white",
    RiskTier.UNKNOWN: "bg-gray-500 text-white",
}

STATUS_STYLES = {
    StatusTier.COMPLETE: "bg-green-500/10 text-green-400 border border-green-900/20",
    StatusTier.PARTIAL: "bg-yellow-500/10 text-yellow-400 border border-yellow-900/20",
    StatusTier.PENDING: "bg-gray-500/10 text-gray-400 border border-gray-900/20",
}


class RiskClassification(NamedTuple):
    tier: RiskTier
    label: str
    style_class: str


class StatusClassification(NamedTuple):
    tier: StatusTier
    label: str


def risk_tier(score: Optional[float]) -> RiskTier:
    if score is None:
        return RiskTier.UNKNOWN
    if score >= 75:
        return RiskTier.CRITICAL
    if score >= 50:
        return RiskTier.HIGH
    if score >= 25:
        return RiskTier.MEDIUM
    return RiskTier.LOW


def classify_risk(score: Optional[float]) -> RiskClassification:
    """Классификация оценки риска 0-100 (значения вне диапазона попадают в крайний уровень)"""
    tier = risk_tier(score)
    return RiskClassification(tier=tier, label=tier.value, style_class=RISK_STYLES[tier])


def classify_status(has_static: bool, has_dynamic: bool) -> StatusClassification:
    if has_static and has_dynamic:
        tier = StatusTier.COMPLETE
    elif has_static or has_dynamic:
        tier = StatusTier.PARTIAL
    else:
        tier = StatusTier.PENDING
    return StatusClassification(tier=tier, label=tier.value)
