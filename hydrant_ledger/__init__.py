"""Hydrant Ledger: fire-hydrant inspection records with an append-only audit trail.

Every create, update and delete of a hydrant is written to the history
ledger in the same transaction as the change itself, so any hydrant row can
be traced back through its chain of prior versions.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
