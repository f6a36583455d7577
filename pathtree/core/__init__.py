"""Core building blocks: models, repositories and settings."""
