"""Configuration loading and display helpers."""
