"""SQL dialects the builder can render cursor clauses for."""
