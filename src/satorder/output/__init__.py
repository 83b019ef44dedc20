"""Output layer — render ServiceResult for terminals or machines."""
