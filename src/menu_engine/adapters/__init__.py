"""Frontend adapters for the menu engine."""
