"""Release resolution and gating.

- resolve: version and tag resolution from the repository
- gates: ordered build and publish checks with a fail-fast driver
- service: use cases sequencing resolution, gates and publish actions
- ports: collaborator protocols (version control, build system, release host)
"""

from __future__ import annotations
