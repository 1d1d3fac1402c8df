from __future__ import annotations

# GH / API operations
GH_TIMEOUT_SECONDS = 60.0

# Release asset uploads can be large
GH_UPLOAD_TIMEOUT_SECONDS = 15 * 60.0

# Querying the built artifact for its version
ARTIFACT_VERSION_TIMEOUT_SECONDS = 30.0
