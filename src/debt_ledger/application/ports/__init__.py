"""Application ports package."""

from .change_feed import ChangeEvent, ChangeFeedPort, ChangeHandler, ChangeKind
from .database import DatabaseEnginePort
from .debt_repository import DebtRepositoryPort
from .identity import IdentityPort, Owner
from .preference_store import PreferenceStorePort
from .rate_source import RateSourcePort

__all__ = [
    "ChangeEvent",
    "ChangeFeedPort",
    "ChangeHandler",
    "ChangeKind",
    "DatabaseEnginePort",
    "DebtRepositoryPort",
    "IdentityPort",
    "Owner",
    "PreferenceStorePort",
    "RateSourcePort",
]
