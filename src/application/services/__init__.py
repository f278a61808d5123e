"""Application services."""

from src.application.services.charge_committer import ChargeCommitter, CommitOutcome

__all__ = ["ChargeCommitter", "CommitOutcome"]
