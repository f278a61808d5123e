"""Application environment types.

Environments:
- DEVELOPMENT: Local development against the Payoneer sandbox
- TESTING: Automated test execution
- CI: Continuous integration
- PRODUCTION: Live Payoneer API
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
