"""Progress bounded context: program completions and certificates."""
