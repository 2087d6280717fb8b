"""
PharmaTrace: chain-of-custody ledger for pharmaceutical batches.

Two components:
  - Manufacturer registry (admission workflow gated by a single administrator)
  - Batch custody ledger (custodian-gated state machine + append-only event log)
"""

__version__ = "0.1.0"
