"""Bottleneck and build-health heuristics."""
