"""
Test suite for Fleet Trips.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_trip_import_service.py -v
"""
