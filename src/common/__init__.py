"""Shared infrastructure: configuration, logging, LLM clients and JSON parsing."""
