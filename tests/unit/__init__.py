"""
Unit Tests - Testing Individual Components in Isolation.

Filters are exercised directly on io.StringIO streams; no files needed.

Test Files:
    - test_sample_keys.py: Sample key parsing
    - test_customer_filter.py: Customer filter and early termination
    - test_invoice_filter.py: Invoice filter and invoice key collection
    - test_invoice_item_filter.py: Invoice item filter
    - test_config_loader.py: Configuration loading/validation
"""
