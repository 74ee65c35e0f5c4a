"""L5 Orchestration — the installer pipeline."""
