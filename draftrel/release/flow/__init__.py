"""Release drafting use cases."""
