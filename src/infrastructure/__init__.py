"""Infrastructure layer - Adapters and external integrations.

This layer contains implementations of domain protocols (ports):
- Payoneer OAuth and payments API clients
- In-memory payment session store
- Structured logging adapter

Structure:
- providers/: Payoneer integration (OAuth, balances, payments)
- session/: Payment session storage
- logging/: structlog configuration

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
