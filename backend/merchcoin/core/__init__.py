"""Core Layer — pure ledger rules, domain types, errors and boundary protocols.

Invariants:
    - No IO and no SQLAlchemy imports in core (shell code lives in infrastructure/ and services/)
"""
