"""Domain layer - business rules with no web framework dependencies."""
