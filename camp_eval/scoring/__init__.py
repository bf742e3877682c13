"""
scoring/ - Registration validation and rating engine

Modules:
    utils.py                   - Decimal helpers
    registration_validator.py  - Section-scoped registration validation and input normalization
    rating_aggregator.py       - Per-role category rating schemas, totals and commit
    composite.py               - Composite of two complete ratings
    role_filter.py             - Role-scoped subject filtering and platoon stats
"""
