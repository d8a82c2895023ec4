"""Tests for the version string."""

from unittest.mock import patch

from loglens.version import BuildInfo, get_version_string


def test_full_hash_is_shortened():
    info = BuildInfo(commit="0123456789abcdef0123456789abcdef01234567",
                     date="2024-05-01T12:00:00+00:00", dirty=False)

    with patch('loglens.version.get_build_info', return_value=info):
        assert get_version_string() == "0123456 2024-05-01T12:00:00+00:00"


def test_dirty_tree_is_marked():
    info = BuildInfo(commit="0123456789abcdef0123456789abcdef01234567", date=None, dirty=True)

    with patch('loglens.version.get_build_info', return_value=info):
        assert get_version_string() == "0123456-dirty unknown"


def test_package_version_is_kept_whole():
    info = BuildInfo(commit="v0.1.0", date=None, dirty=False)

    with patch('loglens.version.get_build_info', return_value=info):
        assert get_version_string() == "v0.1.0 unknown"


def test_unknown_build():
    with patch('loglens.version.get_build_info',
               return_value=BuildInfo(commit=None, date=None, dirty=False)):
        assert get_version_string() == "unknown unknown"
