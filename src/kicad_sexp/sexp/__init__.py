"""Symbolic value model and the adapter around the external reader."""
