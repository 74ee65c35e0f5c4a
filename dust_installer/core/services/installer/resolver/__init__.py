"""L2 Resolver — version and target resolution."""
