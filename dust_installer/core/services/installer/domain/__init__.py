"""L1 Domain — pure naming and formatting helpers."""
