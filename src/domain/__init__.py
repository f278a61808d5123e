"""Domain layer - Pure business logic.

Charges, payment sessions, MFA challenges and the value objects they carry.
The domain layer has NO dependencies on any framework or infrastructure.

Structure:
- entities/: Charge and PaymentSession (mutable, have identity)
- value_objects/: Money, BearerToken, Challenge, disclosures (immutable)
- enums/: Remote charge status codes, commit states, callback kinds
- protocols/: Ports implemented by infrastructure (provider, session store, logger)
- errors/: Error types returned inside Result values
"""
