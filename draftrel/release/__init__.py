"""Release drafting bounded context.

Layers:
- domain: versions, channels, tag resolution, version policy, changelog entries
- resolve: user input normalization
- infra: git history and persisted changelog adapters
- flow: the end-to-end draft use case
- view: operator instructions rendering
"""

from __future__ import annotations
