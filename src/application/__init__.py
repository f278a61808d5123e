"""Application layer - Use cases and orchestration.

This layer contains the use cases started by the OAuth callback:
- Commands: Authorization-code and challenge-response flows
- Services: Charge commit lifecycle (timeout, status check, retry, MFA)

Structure:
- commands/: Command dataclasses and handlers (write operations)
- services/: ChargeCommitter state machine
- dtos/: Results handed to the presentation layer
- errors/: Application-level error types

The application layer orchestrates domain logic but contains no business rules.
"""
