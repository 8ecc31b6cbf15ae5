"""
Tests for the probe and install steps of the Starsector mod installer.
"""

import logging

import pytest

from starsector_vortex import installer
from starsector_vortex.errors import InvalidPackageError
from starsector_vortex.instructions import AttributeInstruction, CopyInstruction
from tests.conftest import as_dir, rel

WELL_FORMED = '{"id":"mod1","name":"My Mod","version":"1.0","author":"Alice"}'


def attrs(result):
    return [i for i in result.instructions if isinstance(i, AttributeInstruction)]


def copies(result):
    return [i for i in result.instructions if isinstance(i, CopyInstruction)]


# ── probe ────────────────────────────────────────────────────────────────────

def test_probe_other_game_not_supported():
    result = installer.test_supported_content([rel("mod1", "mod_info.json")], "skyrim")
    assert result.supported is False
    assert result.required_files is None


def test_probe_without_mod_info_not_supported():
    files = [as_dir("mod1"), rel("mod1", "data", "foo.txt")]
    result = installer.test_supported_content(files, "starsector")
    assert result.supported is False
    assert result.required_files is None


def test_probe_with_mod_info_supported():
    manifest = rel("mod1", "mod_info.json")
    result = installer.test_supported_content([as_dir("mod1"), manifest], "starsector")
    assert result.supported is True
    assert result.required_files == [manifest]


def test_probe_ignores_similar_names():
    files = [rel("mod1", "mod_info.json.bak"), rel("mod1", "old_mod_info.json")]
    assert installer.test_supported_content(files, "starsector").supported is False


def test_probe_to_dict():
    result = installer.test_supported_content([], "starsector")
    assert result.to_dict() == {"supported": False, "requiredFiles": None}


# ── install ──────────────────────────────────────────────────────────────────

def test_install_well_formed(staging, write_mod_info):
    manifest = write_mod_info(WELL_FORMED, "mod1")
    data = rel("mod1", "data", "foo.txt")
    files = [manifest, data]

    result = installer.install_content(files, str(staging), "starsector")

    assert result.instructions == [
        AttributeInstruction("customFileName", "My Mod"),
        AttributeInstruction("version", "1.0"),
        AttributeInstruction("author", "Alice"),
        CopyInstruction(manifest, manifest),
        CopyInstruction(data, data),
    ]


def test_install_result_wire_format(staging, write_mod_info):
    manifest = write_mod_info(WELL_FORMED, "mod1")
    result = installer.install_content([manifest], str(staging), "starsector")

    assert result.to_dict()["instructions"][0] == {
        "type": "attribute", "key": "customFileName", "value": "My Mod",
    }
    assert result.to_dict()["instructions"][-1] == {
        "type": "copy", "source": manifest, "destination": manifest,
    }


def test_install_nested_mod_uses_own_folder_name(staging, write_mod_info):
    manifest = write_mod_info('{"id": "x"}', "Archive-1.2", "MyMod")
    data = rel("Archive-1.2", "MyMod", "data", "hulls", "ship.csv")
    readme = rel("Archive-1.2", "README.txt")
    files = [readme, manifest, data]

    result = installer.install_content(files, str(staging), "starsector")

    assert copies(result) == [
        CopyInstruction(manifest, rel("MyMod", "mod_info.json")),
        CopyInstruction(data, rel("MyMod", "data", "hulls", "ship.csv")),
    ]


def test_install_skips_directory_entries(staging, write_mod_info):
    manifest = write_mod_info('{"id": "x"}', "mod1")
    files = [as_dir("mod1"), as_dir("mod1", "data"), manifest, rel("mod1", "data", "a.txt")]

    result = installer.install_content(files, str(staging), "starsector")

    sources = [c.source for c in copies(result)]
    assert sources == [manifest, rel("mod1", "data", "a.txt")]


def test_install_keeps_file_list_order(staging, write_mod_info):
    manifest = write_mod_info('{"id": "x"}', "mod1")
    files = [rel("mod1", "z.txt"), manifest, rel("mod1", "a.txt")]

    result = installer.install_content(files, str(staging), "starsector")

    assert [c.source for c in copies(result)] == files


def test_install_does_not_match_sibling_prefix(staging, write_mod_info):
    manifest = write_mod_info('{"id": "x"}', "mod1")
    files = [manifest, rel("mod10", "other.txt")]

    result = installer.install_content(files, str(staging), "starsector")

    assert [c.source for c in copies(result)] == [manifest]


def test_install_trims_name_and_version_not_author(staging, write_mod_info):
    manifest = write_mod_info(
        '{"id": "x", "name": "  Spaced  ", "version": " 2.0\\t", "author": "  Bob "}',
        "mod1",
    )
    result = installer.install_content([manifest], str(staging), "starsector")

    assert attrs(result) == [
        AttributeInstruction("customFileName", "Spaced"),
        AttributeInstruction("version", "2.0"),
        AttributeInstruction("author", "  Bob "),
    ]


def test_install_missing_optional_attributes_default_empty(staging, write_mod_info, caplog):
    manifest = write_mod_info('{"id": "x"}', "mod1")

    with caplog.at_level(logging.INFO):
        result = installer.install_content([manifest], str(staging), "starsector")

    assert [a.value for a in attrs(result)] == ["", "", ""]
    assert "name" in caplog.text


def test_install_never_sets_description(staging, write_mod_info):
    manifest = write_mod_info('{"id": "x", "description": "Long text"}', "mod1")
    result = installer.install_content([manifest], str(staging), "starsector")
    assert "description" not in [a.key for a in attrs(result)]


def test_install_version_object(staging, write_mod_info):
    manifest = write_mod_info(
        '{id: "x", version: {major: 0, minor: 9, patch: "5"}}', "mod1",
    )
    result = installer.install_content([manifest], str(staging), "starsector")
    assert AttributeInstruction("version", "0.9.5") in attrs(result)


def test_install_with_comments(staging, write_mod_info):
    text = '{\n  "id": "x", # identifier\n  "name": "Hash # Mod",\n}\n'
    manifest = write_mod_info(text, "mod1")

    result = installer.install_content([manifest], str(staging), "starsector")

    assert attrs(result)[0] == AttributeInstruction("customFileName", "Hash # Mod")


def test_install_parse_failure_returns_empty(staging, write_mod_info, caplog):
    manifest = write_mod_info('{"id": "x", "name": {', "mod1")

    with caplog.at_level(logging.WARNING):
        result = installer.install_content(
            [manifest, rel("mod1", "a.txt")], str(staging), "starsector",
        )

    assert result.instructions == []
    assert "mod_info.json invalid" in caplog.text


def test_install_missing_id_rejected(staging, write_mod_info):
    manifest = write_mod_info('{"name": "No Id", "version": "1.0"}', "mod1")
    with pytest.raises(InvalidPackageError):
        installer.install_content([manifest], str(staging), "starsector")


def test_install_empty_id_rejected(staging, write_mod_info):
    manifest = write_mod_info('{"id": ""}', "mod1")
    with pytest.raises(InvalidPackageError):
        installer.install_content([manifest], str(staging), "starsector")


def test_install_non_object_rejected(staging, write_mod_info):
    manifest = write_mod_info('["id"]', "mod1")
    with pytest.raises(InvalidPackageError):
        installer.install_content([manifest], str(staging), "starsector")


def test_install_root_manifest_rejected(staging, write_mod_info):
    manifest = write_mod_info('{"id": "x"}')
    with pytest.raises(InvalidPackageError, match="package root"):
        installer.install_content([manifest, "data.txt"], str(staging), "starsector")


def test_install_without_mod_info_rejected(staging):
    with pytest.raises(InvalidPackageError):
        installer.install_content([rel("mod1", "a.txt")], str(staging), "starsector")


def test_install_first_mod_info_wins(staging, write_mod_info):
    first = write_mod_info('{"id": "a", "name": "First"}', "a")
    second = write_mod_info('{"id": "b", "name": "Second"}', "b")

    result = installer.install_content([first, second], str(staging), "starsector")

    assert attrs(result)[0].value == "First"
    assert [c.source for c in copies(result)] == [first]


def test_install_invalid_utf8_replaced(staging, write_mod_info):
    manifest = write_mod_info("", "mod1")
    (staging / manifest).write_bytes(b'{"id": "x", "name": "\xff\xfe bad", "author": "Jos\xe9"}')

    result = installer.install_content([manifest], str(staging), "starsector")

    assert attrs(result)[0] == AttributeInstruction("customFileName", "\ufffd\ufffd bad")
    assert attrs(result)[2] == AttributeInstruction("author", "Jos\ufffd")
    assert [c.source for c in copies(result)] == [manifest]


def test_install_deep_nesting_returns_empty(staging, write_mod_info):
    depth = 5000
    manifest = write_mod_info('{"id": "x", "n": ' + "[" * depth + "]" * depth + "}", "mod1")

    result = installer.install_content([manifest], str(staging), "starsector")

    assert result.instructions == []
