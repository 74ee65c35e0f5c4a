"""L0 Data — static lookup tables."""
