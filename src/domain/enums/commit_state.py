"""Charge commit lifecycle states.

State Machine:
    REQUESTED → COMPLETED | CANCELLED | ACCEPTED | CHALLENGE_REQUIRED | FAILED
    REQUESTED → TIMED_OUT → POLLING (first timeout only)
    POLLING → COMPLETED | CANCELLED | REQUESTED (single retry) | FAILED

    - REQUESTED: A commit call is about to be (or is being) made
    - TIMED_OUT: The commit call hit its timeout
    - POLLING: Evaluating the status fetched after a timeout
    - COMPLETED: Charge finalized (terminal)
    - CANCELLED: Charge cancelled by Payoneer (terminal, never retried)
    - ACCEPTED: Commit answered with a non-terminal status (terminal, never
      retried; the final status comes from a later status query)
    - CHALLENGE_REQUIRED: Account holder must pass MFA first (terminal for this call)
    - FAILED: Gave up (terminal)
"""

from enum import Enum


class CommitState(str, Enum):
    """States of the charge commit state machine."""

    REQUESTED = "requested"
    TIMED_OUT = "timed_out"
    POLLING = "polling"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ACCEPTED = "accepted"
    CHALLENGE_REQUIRED = "challenge_required"
    FAILED = "failed"

    @classmethod
    def terminal_states(cls) -> list["CommitState"]:
        """Get states that end a commit call.

        Returns:
            list[CommitState]: Terminal states.
        """
        return [
            cls.COMPLETED,
            cls.CANCELLED,
            cls.ACCEPTED,
            cls.CHALLENGE_REQUIRED,
            cls.FAILED,
        ]

    def is_terminal(self) -> bool:
        """Check whether the state machine stops in this state."""
        return self in self.terminal_states()
