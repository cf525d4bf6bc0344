"""merchcoin — virtual-currency ledger for the merch shop.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
