"""
L0 Data — host name patterns and the release target table.

Pure data, no logic.  Adding a new release target is one line in
``TARGET_TRIPLES``.
"""

from __future__ import annotations

from dust_installer.core.models.platform import ArchKey, PlatformKey

# ``uname -s`` / ``platform.system()`` globs, matched case-insensitively.
PLATFORM_PATTERNS: tuple[tuple[tuple[str, ...], PlatformKey], ...] = (
    (("linux*",), PlatformKey.LINUX),
    (("darwin*",), PlatformKey.DARWIN),
    (("mingw*", "msys*", "cygwin*", "windows*"), PlatformKey.WINDOWS),
)

# ``uname -m`` / ``platform.machine()`` names, matched case-insensitively.
ARCH_PATTERNS: tuple[tuple[tuple[str, ...], ArchKey], ...] = (
    (("x86_64", "amd64"), ArchKey.X86_64),
    (("aarch64", "arm64"), ArchKey.AARCH64),
    (("armv7l",), ArchKey.ARM),
    (("i686", "i386"), ArchKey.I686),
)

ROSETTA_WARNING = "Using x86_64 binary (will run via Rosetta 2 on Apple Silicon)"

# (platform, arch) → (target triple, compatibility warning or None)
TARGET_TRIPLES: dict[tuple[PlatformKey, ArchKey], tuple[str, str | None]] = {
    (PlatformKey.LINUX, ArchKey.X86_64):    ("x86_64-unknown-linux-musl", None),
    (PlatformKey.LINUX, ArchKey.AARCH64):   ("aarch64-unknown-linux-musl", None),
    (PlatformKey.LINUX, ArchKey.ARM):       ("arm-unknown-linux-musleabi", None),
    (PlatformKey.LINUX, ArchKey.I686):      ("i686-unknown-linux-musl", None),
    (PlatformKey.DARWIN, ArchKey.X86_64):   ("x86_64-apple-darwin", None),
    (PlatformKey.DARWIN, ArchKey.AARCH64):  ("x86_64-apple-darwin", ROSETTA_WARNING),
    (PlatformKey.WINDOWS, ArchKey.X86_64):  ("x86_64-pc-windows-msvc", None),
    (PlatformKey.WINDOWS, ArchKey.I686):    ("i686-pc-windows-msvc", None),
}

# Archive format per platform.  Anything not listed ships as a tarball.
ARCHIVE_EXTENSIONS: dict[PlatformKey, str] = {
    PlatformKey.WINDOWS: "zip",
}
DEFAULT_ARCHIVE_EXTENSION = "tar.gz"

EXECUTABLE_SUFFIXES: dict[PlatformKey, str] = {
    PlatformKey.WINDOWS: ".exe",
}

PLATFORM_LABELS: dict[PlatformKey, str] = {
    PlatformKey.LINUX: "Linux",
    PlatformKey.DARWIN: "macOS",
    PlatformKey.WINDOWS: "Windows",
}
