"""Test suite for the tourneyform registration engine.

This package contains tests for:
- Field rules and form-level checks
- Message composition and destination links
- Notices, events and configuration
- End-to-end submission flows through RegistrationRuntime
"""
