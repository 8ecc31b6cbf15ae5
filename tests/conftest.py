"""Shared fixtures: mod packages extracted into a temporary staging dir."""

import os

import pytest


def rel(*parts):
    """Join package-relative parts with the platform separator."""
    return os.path.join(*parts)


def as_dir(*parts):
    return os.path.join(*parts) + os.sep


@pytest.fixture
def staging(tmp_path):
    return tmp_path


@pytest.fixture
def write_mod_info(staging):
    """Write mod_info.json text at a package-relative path; returns that path."""
    def _write(text, *parts):
        rel_path = rel(*parts, "mod_info.json")
        path = staging / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return rel_path
    return _write
