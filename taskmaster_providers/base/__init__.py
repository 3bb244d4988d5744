"""Shared provider layers: errors, logging, HTTP pool, models and streaming."""
