"""Retry policies for the transport layer."""
