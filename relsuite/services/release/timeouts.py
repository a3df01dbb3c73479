from __future__ import annotations

# GH / API operations
GH_TIMEOUT_SECONDS = 60.0

# Artifact bundles can be large
GH_DOWNLOAD_TIMEOUT_SECONDS = 30 * 60.0

# Idempotent GH read retry policy (never applied to release creation)
GH_READ_RETRY_ATTEMPTS = 3
GH_READ_RETRY_DELAY_SECONDS = 1.0
