"""Normalization of user-supplied release inputs."""
