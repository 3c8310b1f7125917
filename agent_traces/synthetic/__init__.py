"""Synthetic multi-agent trace generation."""
