"""Application layer: use cases for the manufacturer registry and custody ledger."""
