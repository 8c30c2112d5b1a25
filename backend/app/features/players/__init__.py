"""Players feature: player records and the per-sport stats ledger."""
