"""HTTP API for hydrant records and the history ledger."""

from hydrant_ledger.api.app import create_app

__all__ = ["create_app"]
