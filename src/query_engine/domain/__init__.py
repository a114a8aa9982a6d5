"""Domain layer - entities, value objects and relational operators."""
