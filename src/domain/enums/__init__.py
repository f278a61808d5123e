"""Domain enums.

Usage:
    from src.domain.enums import ChargeStatus, CommitState, CallbackKind
"""

from src.domain.enums.callback_kind import CallbackKind
from src.domain.enums.charge_status import ChargeStatus
from src.domain.enums.commit_state import CommitState

__all__ = ["CallbackKind", "ChargeStatus", "CommitState"]
