"""API — HTTP exposition of chain-meta metrics."""
