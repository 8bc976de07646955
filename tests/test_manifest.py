"""
Tests for the package manifest loader.
"""

import textwrap
from pathlib import Path

import pytest

from templa.core.config.manifest_loader import ManifestError, load_package, load_packages


@pytest.fixture
def manifest(tmp_path: Path) -> Path:
    content = textwrap.dedent("""\
        name: shapes
        files:
          - path: shapes.go
            annotations:
              - name: source
                params: {id: stringer, gen: partial.go}
                template: "func (c {{ struct_declr.name }}) String() string { return \\"\\" }"
            structs:
              - name: Circle
                fields:
                  - {name: Radius, type: float64}
                annotations:
                  - name: makeFor
                    params: {id: stringer}
                    arguments: [pointer]
          - path: sub/more.go
            package: shapes_test
            interfaces:
              - name: Shape
                methods:
                  - {name: Area, returns: [float64]}
            types:
              - {name: Sides, type: int}
    """)
    path = tmp_path / "pkg" / "package.yml"
    path.parent.mkdir()
    path.write_text(content)
    return path


class TestLoadPackage:
    def test_structure(self, manifest: Path):
        pkg = load_package(manifest)
        assert pkg.name == "shapes"
        assert Path(pkg.path) == manifest.parent.resolve()
        assert len(pkg.declarations) == 2

        first, second = pkg.declarations
        assert first.package == "shapes"
        assert Path(first.file_path) == manifest.parent.resolve() / "shapes.go"
        assert first.structs[0].fields[0].type == "float64"
        assert first.structs[0].annotations[0].has_arg("pointer")
        assert second.package == "shapes_test"
        assert Path(second.file_path) == manifest.parent.resolve() / "sub" / "more.go"
        assert second.interfaces[0].methods[0].returns == ["float64"]
        assert second.types[0].type == "int"

    def test_sources_found(self, manifest: Path):
        pkg = load_package(manifest)
        [source] = pkg.annotations_for("source")
        assert source.param("gen") == "partial.go"
        assert "String()" in source.template

    def test_package_path_relative_to_manifest(self, tmp_path: Path):
        path = tmp_path / "package.yml"
        path.write_text("name: x\npath: src/x\n")
        assert Path(load_package(path).path) == tmp_path.resolve() / "src" / "x"

    def test_missing(self, tmp_path: Path):
        with pytest.raises(ManifestError, match="not found"):
            load_package(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "package.yml"
        path.write_text("name: [x\n")
        with pytest.raises(ManifestError, match="Invalid YAML"):
            load_package(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "package.yml"
        path.write_text("- x\n")
        with pytest.raises(ManifestError, match="mapping"):
            load_package(path)

    def test_schema_error(self, tmp_path: Path):
        path = tmp_path / "package.yml"
        path.write_text("files: []\n")
        with pytest.raises(ManifestError, match="Invalid manifest"):
            load_package(path)

    def test_load_packages(self, manifest: Path):
        assert [p.name for p in load_packages([manifest])] == ["shapes"]


class TestManifestPathErrors:
    def _load(self, tmp_path: Path, content: str):
        path = tmp_path / "package.yml"
        path.write_text(textwrap.dedent(content))
        return load_package(path)

    def test_null_package_path(self, tmp_path: Path):
        with pytest.raises(ManifestError, match="'path' must be a string"):
            self._load(tmp_path, "name: x\npath:\n")

    def test_non_string_file_path(self, tmp_path: Path):
        with pytest.raises(ManifestError, match=r"files\[0\].path"):
            self._load(tmp_path, "name: x\nfiles:\n  - path: 3\n")

    def test_missing_file_path(self, tmp_path: Path):
        with pytest.raises(ManifestError, match=r"files\[0\].path"):
            self._load(tmp_path, "name: x\nfiles:\n  - package: x\n")

    def test_file_entry_not_mapping(self, tmp_path: Path):
        with pytest.raises(ManifestError, match=r"files\[1\] must be a mapping"):
            self._load(tmp_path, "name: x\nfiles:\n  - path: a.go\n  - b.go\n")

    def test_files_not_list(self, tmp_path: Path):
        with pytest.raises(ManifestError, match="'files' must be a list"):
            self._load(tmp_path, "name: x\nfiles: a.go\n")
