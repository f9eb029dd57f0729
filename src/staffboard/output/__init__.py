"""Output layer — Rich renderers and JSON formatting for ServiceResult."""
