"""Adapters binding the domain ports to storage and remote providers."""
