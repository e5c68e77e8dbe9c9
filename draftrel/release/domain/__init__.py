"""Pure release rules: no git, no console, no files."""
