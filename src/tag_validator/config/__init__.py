"""Configuration for tag_validator."""
