"""Test suite for the Payoneer charge sample.

Test structure follows the test pyramid:
- unit/: Unit tests - domain logic, handlers and mappers in isolation
- integration/: API clients against mocked HTTP (pytest-httpx)
- api/: Callback endpoints through FastAPI TestClient
"""
