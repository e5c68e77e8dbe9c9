"""Rendering of drafts for the human operator."""
