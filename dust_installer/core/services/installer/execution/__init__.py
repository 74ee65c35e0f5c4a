"""L4 Execution — side effects: download, extract, install."""
