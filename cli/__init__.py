"""CLI package — click commands and Rich display helpers."""
