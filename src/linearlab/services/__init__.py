"""Calls to external services. Nothing here touches Qt."""
