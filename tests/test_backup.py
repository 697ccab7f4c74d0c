"""Tests for the backup manifest reader and writer."""

import json

import pytest
import semantic_version

from backup import read_backup, write_backup
from conftest import make_package
from sync.models import InvalidVersion, LoadError


def _write_entries(path, *entries):
    path.write_text(json.dumps({"packages": list(entries)}))


class TestWriteBackup:
    """Serialized manifest shape."""

    def test_sorted_by_name_and_source_path_omitted(self, tmp_path):
        """Test entries are sorted by name and registry packages carry no source_path."""
        path = tmp_path / "backup.json"
        write_backup([make_package("zed"), make_package("alpha", "1.2.3")], str(path))
        data = json.loads(path.read_text())
        assert [p["name"] for p in data["packages"]] == ["alpha", "zed"]
        assert data["packages"][0]["version"] == "1.2.3"
        assert "source_path" not in data["packages"][0]

    def test_local_package_keeps_source_path(self, tmp_path):
        """Test a local package is written with its source_path."""
        path = tmp_path / "backup.json"
        write_backup([make_package("tool", source_path="/src/tool")], str(path))
        data = json.loads(path.read_text())
        assert data["packages"][0]["source_path"] == "/src/tool"

    def test_written_file_reads_back(self, tmp_path):
        """Test a written backup loads back into equal packages."""
        path = tmp_path / "backup.json"
        packages = [
            make_package("foo", "0.1.0", all_features=True, target="x86_64-unknown-linux-gnu"),
            make_package("package", "0.5.3", features=["feature1", "feature2"],
                         profile="debug", version_req="=0.5.3", bins=["package", "package-subcmd"]),
        ]
        write_backup(packages, str(path))
        assert read_backup(str(path)) == packages


class TestReadBackup:
    """Manifest validation."""

    def test_bare_list_with_defaults(self, tmp_path):
        """Test a bare list of minimal entries gets default field values."""
        path = tmp_path / "backup.json"
        path.write_text(json.dumps([{"name": "foo", "version": "1.0.0"}]))
        packages = read_backup(str(path))
        assert packages[0].name == "foo"
        assert packages[0].version == semantic_version.Version("1.0.0")
        assert packages[0].profile == "release"
        assert packages[0].features == []
        assert packages[0].bins == []

    def test_null_optional_fields(self, tmp_path):
        """Test null values for optional fields are accepted."""
        path = tmp_path / "backup.json"
        _write_entries(path, {"name": "foo", "version": "1.0.0", "features": None,
                              "target": None, "version_req": None, "bins": None})
        packages = read_backup(str(path))
        assert packages[0].features == []
        assert packages[0].target is None

    def test_missing_file(self, tmp_path):
        """Test a missing backup file raises LoadError."""
        with pytest.raises(LoadError):
            read_backup(str(tmp_path / "missing.json"))

    def test_invalid_json(self, tmp_path):
        """Test a backup that is not JSON raises LoadError."""
        path = tmp_path / "backup.json"
        path.write_text("[")
        with pytest.raises(LoadError):
            read_backup(str(path))

    def test_wrong_top_level(self, tmp_path):
        """Test a packages value that is not a list raises LoadError."""
        path = tmp_path / "backup.json"
        path.write_text(json.dumps({"packages": "foo"}))
        with pytest.raises(LoadError):
            read_backup(str(path))

    def test_entry_without_version(self, tmp_path):
        """Test an entry without a version raises LoadError."""
        path = tmp_path / "backup.json"
        _write_entries(path, {"name": "foo"})
        with pytest.raises(LoadError):
            read_backup(str(path))

    def test_entry_with_invalid_version(self, tmp_path):
        """Test an entry with a non-semver version raises InvalidVersion."""
        path = tmp_path / "backup.json"
        _write_entries(path, {"name": "foo", "version": "1.0"})
        with pytest.raises(InvalidVersion):
            read_backup(str(path))

    def test_duplicate_names(self, tmp_path):
        """Test the same package listed twice raises LoadError."""
        path = tmp_path / "backup.json"
        entry = {"name": "foo", "version": "1.0.0"}
        _write_entries(path, entry, entry)
        with pytest.raises(LoadError):
            read_backup(str(path))

    @pytest.mark.parametrize("key", ["all_features", "no_default_features"])
    @pytest.mark.parametrize("value", ["false", 0, 1, None])
    def test_non_bool_flag_is_rejected(self, tmp_path, key, value):
        """Test feature flags must be JSON booleans rather than truthy values."""
        path = tmp_path / "backup.json"
        _write_entries(path, {"name": "foo", "version": "1.0.0", key: value})
        with pytest.raises(LoadError):
            read_backup(str(path))

    @pytest.mark.parametrize("key", ["features", "bins"])
    @pytest.mark.parametrize("value", ["abc", {"a": 1}, ["ok", 3]])
    def test_non_string_list_is_rejected(self, tmp_path, key, value):
        """Test features and bins must be lists of strings."""
        path = tmp_path / "backup.json"
        _write_entries(path, {"name": "foo", "version": "1.0.0", key: value})
        with pytest.raises(LoadError):
            read_backup(str(path))

    @pytest.mark.parametrize("key", ["profile", "target", "version_req", "source_path"])
    @pytest.mark.parametrize("value", [1, True, ["release"]])
    def test_non_string_field_is_rejected(self, tmp_path, key, value):
        """Test string fields reject numbers, booleans and lists."""
        path = tmp_path / "backup.json"
        _write_entries(path, {"name": "foo", "version": "1.0.0", key: value})
        with pytest.raises(LoadError):
            read_backup(str(path))

    def test_string_false_does_not_enable_all_features(self, tmp_path):
        """Test a quoted "false" fails the load instead of turning on all features."""
        path = tmp_path / "backup.json"
        path.write_text(json.dumps([
            {"name": "foo", "version": "1.0.0", "all_features": "false", "features": "abc"}
        ]))
        with pytest.raises(LoadError, match="all_features"):
            read_backup(str(path))
