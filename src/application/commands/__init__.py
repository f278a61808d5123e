"""Commands - Write operations that change state.

Commands represent the two flows started by the OAuth callback. They are
immutable dataclasses with imperative names; each has a handler in
handlers/ that executes it.
"""

from src.application.commands.callback_commands import (
    HandleAuthorizationCode,
    ResumeAfterChallenge,
)

__all__ = [
    "HandleAuthorizationCode",
    "ResumeAfterChallenge",
]
