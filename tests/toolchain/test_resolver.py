"""
Tests for tcrun.toolchain.resolver module.
"""

import pytest

from tcrun.core.version import Version
from tcrun.toolchain.installation import Installation
from tcrun.toolchain.resolver import Resolution, Resolver
from tests.fixtures.installations import make_installation


def installation_at(root, version="6.0.1", **layout):
    make_installation(root, version=version, **layout)
    return Installation.at(root, Version.parse(version), "Vendor", system=True)


@pytest.fixture
def installations(tmp_path):
    """
    Three installations, newest first:

    - 6.1.0: toolchain X only, Windows.sdk
    - 6.0.1: toolchains X and Y, Android.sdk only
    - 5.9.0: toolchain Y, Windows.sdk and Android.sdk
    """
    return [
        installation_at(
            tmp_path / "6.1.0",
            version="6.1.0",
            toolchains={"X": ["tool.exe"]},
            platforms={"Windows.platform": ["Windows.sdk"]},
        ),
        installation_at(
            tmp_path / "6.0.1",
            version="6.0.1",
            toolchains={"X": ["tool.exe"], "Y": ["tool.exe"]},
            platforms={"Android.platform": ["Android.sdk"]},
        ),
        installation_at(
            tmp_path / "5.9.0",
            version="5.9.0",
            toolchains={"Y": ["tool.exe"]},
            platforms={
                "Windows.platform": ["Windows.sdk"],
                "Android.platform": ["Android.sdk"],
            },
        ),
    ]


class TestSelectInstallation:
    """Tests for Resolver.select_installation()."""

    def test_no_selectors_picks_newest(self, installations):
        assert Resolver(installations).select_installation() is installations[0]

    def test_toolchain_only(self, installations):
        assert Resolver(installations).select_installation("Y") is installations[1]

    def test_sdk_only(self, installations):
        selected = Resolver(installations).select_installation(sdk_name="Android.sdk")

        assert selected is installations[1]

    def test_both_selectors_must_match(self, installations):
        """Test an installation with only one of the two selectors is skipped."""
        resolver = Resolver(installations)

        # 6.1.0 has X but not Android.sdk; 6.0.1 has both
        assert resolver.select_installation("X", "Android.sdk") is installations[1]
        # 6.1.0 lacks Y, 6.0.1 lacks Windows.sdk; only 5.9.0 has both
        assert resolver.select_installation("Y", "Windows.sdk") is installations[2]

    def test_no_match(self, installations):
        resolver = Resolver(installations)

        assert resolver.select_installation("Z") is None
        assert resolver.select_installation(sdk_name="Linux.sdk") is None
        assert resolver.select_installation("X", "Linux.sdk") is None

    def test_empty(self):
        assert Resolver([]).select_installation() is None


class TestResolve:
    """Tests for Resolver.resolve()."""

    def test_full_resolution(self, installations):
        resolution = Resolver(installations).resolve("Y", "Windows.sdk")

        assert resolution.installation is installations[2]
        assert resolution.toolchain.identifier == "Y"
        assert resolution.platform.identifier == "Windows.platform"
        assert resolution.sdk.identifier == "Windows.sdk"
        assert resolution.sdk.location == (
            installations[2].platforms_root
            / "Windows.platform"
            / "Developer"
            / "SDKs"
            / "Windows.sdk"
        )

    def test_default_toolchain_is_first(self, installations):
        resolution = Resolver(installations).resolve(sdk_name="Windows.sdk")

        assert resolution.installation is installations[0]
        assert resolution.toolchain is installations[0].toolchains.first()

    def test_selected_toolchain(self, installations):
        resolution = Resolver(installations).resolve("X", "Android.sdk")

        assert resolution.toolchain.identifier == "X"
        assert resolution.toolchain.location.parent == installations[1].root / "Toolchains"

    def test_without_sdk_selector(self, installations):
        resolution = Resolver(installations).resolve()

        assert resolution.installation is installations[0]
        assert resolution.platform is None
        assert resolution.sdk is None

    def test_no_match(self, installations):
        assert Resolver(installations).resolve("Z", "Windows.sdk") is None

    def test_first_platform_owning_sdk(self, tmp_path):
        installation = installation_at(
            tmp_path / "Swift",
            platforms={
                "A.platform": ["Shared.sdk"],
                "B.platform": ["Shared.sdk"],
            },
        )

        resolution = Resolver([installation]).resolve(sdk_name="Shared.sdk")

        assert resolution.platform is installation.platforms.first()
        assert resolution.sdk.location.parent == resolution.platform.sdk_root

    def test_installation_without_toolchains(self, tmp_path):
        installation = installation_at(tmp_path / "Swift", toolchains={})

        resolution = Resolver([installation]).resolve(sdk_name="Windows.sdk")

        assert resolution.toolchain is None
        assert resolution.find_tool("tool.exe") is None

    def test_enumeration_happens_once(self, installations, monkeypatch):
        """Test membership checks and selection share one directory scan."""
        import os

        scanned = []
        real_scandir = os.scandir

        def tracking_scandir(path):
            scanned.append(str(path))
            return real_scandir(path)

        monkeypatch.setattr("tcrun.toolchain.enumerators.os.scandir", tracking_scandir)

        resolver = Resolver(installations)
        resolver.resolve("X", "Android.sdk")
        resolver.resolve("X", "Android.sdk")

        assert len(scanned) == len(set(scanned))


class TestResolutionFindTool:
    """Tests for Resolution.find_tool()."""

    def test_find_tool(self, installations):
        resolution = Resolver(installations).resolve("X", "Windows.sdk")

        tool = resolution.find_tool("tool.exe", [])

        assert tool == resolution.toolchain.bindir / "tool.exe"

    def test_find_tool_with_extension_list(self, installations):
        resolution = Resolver(installations).resolve("X", "Windows.sdk")

        assert resolution.find_tool("tool", [".exe"]) == resolution.toolchain.bindir / "tool.exe"
        assert resolution.find_tool("tool", []) is None

    def test_missing_tool(self, installations):
        resolution = Resolver(installations).resolve()

        assert resolution.find_tool("missing.exe", []) is None

    def test_resolution_is_immutable(self, installations):
        resolution = Resolver(installations).resolve()

        assert isinstance(resolution, Resolution)
        with pytest.raises(AttributeError):
            resolution.sdk = None
