"""
Tests for tcrun.core.environment module.
"""

from tcrun.core.environment import (
    DEFAULT_SDK,
    default_sdk_name,
    default_toolchain_id,
    executable_extensions,
    get_environment_variable,
    sdk_name_from_path,
)


class TestGetEnvironmentVariable:
    """Tests for get_environment_variable()."""

    def test_present(self):
        assert get_environment_variable("A", {"A": "1"}) == "1"

    def test_missing(self):
        assert get_environment_variable("A", {}) is None

    def test_empty_is_unset(self):
        assert get_environment_variable("A", {"A": ""}) is None

    def test_reads_os_environ(self, monkeypatch):
        """Test that os.environ is used by default."""
        monkeypatch.setenv("TCRUN_TEST_VARIABLE", "value")
        assert get_environment_variable("TCRUN_TEST_VARIABLE") == "value"


class TestSdkSelector:
    """Tests for the SDK selector derived from SDKROOT."""

    def test_default_without_sdkroot(self):
        """Test fallback to Windows.sdk."""
        assert default_sdk_name({}) == "Windows.sdk"
        assert DEFAULT_SDK == "Windows.sdk"

    def test_custom_fallback(self):
        assert default_sdk_name({}, fallback="Android.sdk") == "Android.sdk"

    def test_last_component_of_sdkroot(self):
        """Test SDKROOT path is reduced to its last component."""
        environ = {"SDKROOT": "/sdks/Platforms/Android.platform/Developer/SDKs/Android.sdk"}
        assert default_sdk_name(environ) == "Android.sdk"

    def test_windows_style_sdkroot(self):
        """Test backslash separated SDKROOT values."""
        environ = {"SDKROOT": "C:\\Swift\\Platforms\\Windows.platform\\Developer\\SDKs\\Windows.sdk\\"}
        assert default_sdk_name(environ) == "Windows.sdk"

    def test_bare_name(self):
        assert sdk_name_from_path("Android.sdk") == "Android.sdk"


class TestToolchainSelector:
    """Tests for the toolchain selector derived from TOOLCHAINS."""

    def test_from_toolchains(self):
        assert default_toolchain_id({"TOOLCHAINS": "6.0.1-RELEASE"}) == "6.0.1-RELEASE"

    def test_unset(self):
        assert default_toolchain_id({}) is None


class TestExecutableExtensions:
    """Tests for executable_extensions()."""

    def test_pathext_order(self):
        environ = {"PATHEXT": ".COM;.EXE;.BAT;.CMD"}
        assert executable_extensions(environ) == [".COM", ".EXE", ".BAT", ".CMD"]

    def test_empty_entries_dropped(self):
        assert executable_extensions({"PATHEXT": ".EXE;;.BAT;"}) == [".EXE", ".BAT"]

    def test_unset(self):
        assert executable_extensions({}) == []
