"""Data Transfer Objects (DTOs) for application layer.

DTOs are result dataclasses returned by command handlers to the presentation
layer.

Usage:
    from src.application.dtos import ChargeFlowResult
"""

from src.application.dtos.charge_dtos import ChargeFlowResult

__all__ = ["ChargeFlowResult"]
