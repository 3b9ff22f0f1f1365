"""Discovery engine: path helpers, command building, execution, caching."""
