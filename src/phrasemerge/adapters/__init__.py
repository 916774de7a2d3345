"""Adapters between the merge engine and its collaborators."""
