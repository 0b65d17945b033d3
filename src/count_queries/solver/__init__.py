"""Pipeline driver wiring partitioning, storage and reduction together."""
