"""Release pipeline.

- semver, model, errors: value types
- ledger, history: what the repository knows (tags, commits)
- conventional, notes: next version and changelog, pure functions
- api, artifacts, publisher: talking to the release API
- flow: one-shot orchestration used by the CLI
"""

from __future__ import annotations
