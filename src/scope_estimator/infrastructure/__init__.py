"""Infrastructure layer - concrete engine components."""
