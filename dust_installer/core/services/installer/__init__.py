"""
Release installer service — package re-exports.

Modules are layered (data → domain → resolver → detection →
execution → orchestration); each layer only imports from the ones
before it.
"""

# ── L0: Data ──
from dust_installer.core.services.installer.data.targets import TARGET_TRIPLES  # noqa: F401

# ── L1: Domain ──
from dust_installer.core.services.installer.domain.archive import (  # noqa: F401
    archive_spec,
    download_url,
    latest_release_url,
    parse_release_tag,
)

# ── L2: Resolver ──
from dust_installer.core.services.installer.resolver.target import (  # noqa: F401
    derive_target,
    supported_targets,
)
from dust_installer.core.services.installer.resolver.version import (  # noqa: F401
    resolve_version,
)

# ── L3: Detection ──
from dust_installer.core.services.installer.detection.platform import (  # noqa: F401
    detect_arch,
    detect_platform,
)

# ── L5: Orchestration ──
from dust_installer.core.services.installer.orchestration.orchestrator import (  # noqa: F401
    Installer,
)
