"""
Test Fixtures and Utilities

Shared test data builders for ledger entries, orders, refunds and order
history extracts.

All test data is synthetic and does not contain real financial information.
"""
