"""
Tests for host detection and target derivation.
"""

from unittest.mock import patch

import pytest

from dust_installer.core.errors import UnsupportedPlatform
from dust_installer.core.models.platform import ArchKey, PlatformKey
from dust_installer.core.services.installer.data.targets import (
    ROSETTA_WARNING,
    TARGET_TRIPLES,
)
from dust_installer.core.services.installer.detection.platform import (
    detect_arch,
    detect_platform,
    host_kernel_name,
    host_machine_name,
)
from dust_installer.core.services.installer.resolver.target import (
    derive_target,
    is_supported,
    supported_targets,
    unsupported_pair,
)

# ── Platform detection ───────────────────────────────────────────────


class TestDetectPlatform:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Linux", PlatformKey.LINUX),
            ("linux", PlatformKey.LINUX),
            ("Darwin", PlatformKey.DARWIN),
            ("MINGW64_NT-10.0-19045", PlatformKey.WINDOWS),
            ("MSYS_NT-10.0", PlatformKey.WINDOWS),
            ("CYGWIN_NT-10.0", PlatformKey.WINDOWS),
            ("Windows", PlatformKey.WINDOWS),
        ],
    )
    def test_known(self, raw, expected):
        assert detect_platform(raw) == expected

    @pytest.mark.parametrize("raw", ["FreeBSD", "SunOS", "", "AIX"])
    def test_unknown(self, raw):
        with pytest.raises(UnsupportedPlatform) as exc:
            detect_platform(raw)
        assert f"Unsupported operating system: {raw}" in str(exc.value)

    def test_reads_host(self):
        with patch(
            "dust_installer.core.services.installer.detection.platform.platform.system",
            return_value="Darwin",
        ):
            assert host_kernel_name() == "Darwin"


class TestDetectArch:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("x86_64", ArchKey.X86_64),
            ("amd64", ArchKey.X86_64),
            ("AMD64", ArchKey.X86_64),
            ("aarch64", ArchKey.AARCH64),
            ("arm64", ArchKey.AARCH64),
            ("armv7l", ArchKey.ARM),
            ("i686", ArchKey.I686),
            ("i386", ArchKey.I686),
        ],
    )
    def test_known(self, raw, expected):
        assert detect_arch(raw) == expected

    @pytest.mark.parametrize("raw", ["riscv64", "ppc64le", "armv6l", "s390x"])
    def test_unknown(self, raw):
        with pytest.raises(UnsupportedPlatform, match=raw):
            detect_arch(raw)

    def test_reads_host(self):
        with patch(
            "dust_installer.core.services.installer.detection.platform.platform.machine",
            return_value="arm64",
        ):
            assert host_machine_name() == "arm64"


# ── Target derivation ────────────────────────────────────────────────


class TestDeriveTarget:
    @pytest.mark.parametrize(
        "platform, arch, triple",
        [
            (PlatformKey.LINUX, ArchKey.X86_64, "x86_64-unknown-linux-musl"),
            (PlatformKey.LINUX, ArchKey.AARCH64, "aarch64-unknown-linux-musl"),
            (PlatformKey.LINUX, ArchKey.ARM, "arm-unknown-linux-musleabi"),
            (PlatformKey.LINUX, ArchKey.I686, "i686-unknown-linux-musl"),
            (PlatformKey.DARWIN, ArchKey.X86_64, "x86_64-apple-darwin"),
            (PlatformKey.WINDOWS, ArchKey.X86_64, "x86_64-pc-windows-msvc"),
            (PlatformKey.WINDOWS, ArchKey.I686, "i686-pc-windows-msvc"),
        ],
    )
    def test_native_targets(self, platform, arch, triple):
        target = derive_target(platform, arch)
        assert target.triple == triple
        assert target.native

    def test_apple_silicon_uses_x86_64_with_warning(self):
        target = derive_target(PlatformKey.DARWIN, ArchKey.AARCH64)
        assert target.triple == "x86_64-apple-darwin"
        assert target.warning == ROSETTA_WARNING
        assert not target.native

    @pytest.mark.parametrize(
        "platform, arch",
        [
            (PlatformKey.WINDOWS, ArchKey.ARM),
            (PlatformKey.WINDOWS, ArchKey.AARCH64),
            (PlatformKey.DARWIN, ArchKey.ARM),
            (PlatformKey.DARWIN, ArchKey.I686),
        ],
    )
    def test_unsupported_pairs(self, platform, arch):
        assert not is_supported(platform, arch)
        with pytest.raises(UnsupportedPlatform) as exc:
            derive_target(platform, arch)
        assert platform.value in str(exc.value)
        assert arch.value in str(exc.value)

    def test_deterministic_over_whole_table(self):
        for platform, arch in TARGET_TRIPLES:
            assert derive_target(platform, arch) == derive_target(platform, arch)

    def test_supported_targets_cover_table(self):
        assert len(supported_targets()) == len(TARGET_TRIPLES)

    def test_is_supported_over_whole_table(self):
        assert all(is_supported(platform, arch) for platform, arch in TARGET_TRIPLES)

    def test_unsupported_pair_message(self):
        err = unsupported_pair(PlatformKey.WINDOWS, ArchKey.ARM)
        assert isinstance(err, UnsupportedPlatform)
        assert str(err) == "Unsupported Windows architecture: arm (os=windows, arch=arm)"
        assert err.stage is None
