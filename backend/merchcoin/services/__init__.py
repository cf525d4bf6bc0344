"""Services Layer — balance engine, ledger workflows and account registry.

Invariants:
    - Every workflow call opens exactly one unit-of-work scope
    - Workflows receive their unit of work by constructor injection
"""
