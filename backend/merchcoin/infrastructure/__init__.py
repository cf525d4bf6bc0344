"""Infrastructure — database sessions, unit of work, ledger store, credentials, logging."""
