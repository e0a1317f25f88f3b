"""
[JP-T006] tests.unit.test_pipeline
패키징 파이프라인 + CLI 통합 단위 테스트

version: 1.0.0
created: 2026-10-16
"""

import os
import tarfile
from pathlib import Path

import yaml
from typer.testing import CliRunner

from jarpack import __version__
from jarpack.cli.main import app
from jarpack.core.config import load_config
from jarpack.pipeline import (
    archive_path_for,
    dist_dir_for,
    pack,
    pack_archive,
    resolve_templates,
)

runner = CliRunner()


def _snapshot(directory: Path) -> dict[str, bytes]:
    return {p.name: p.read_bytes() for p in sorted(directory.iterdir()) if p.is_file()}


class TestPack:  # [JP-T006.1]
    """pack 파이프라인 테스트."""

    def test_layout_on_disk(self, manifest, build_dir):
        config = load_config(manifest.pack)
        layout = pack(manifest, config)
        dist = build_dir.resolve() / "target" / "pack"
        assert layout.dist_dir == dist
        assert sorted(p.name for p in (dist / "lib").iterdir()) == [
            "bar-2.1.jar",
            "core-1.0.jar",
            "docs-1.0.jar",
            "foo-1.0.jar",
            "legacy.jar",
            "util-1.0.jar",
        ]
        assert sorted(p.name for p in (dist / "bin").iterdir()) == ["MyProg", "MyProg.bat"]
        assert (dist / "VERSION").read_text() == "version:=1.0.0\n"
        assert "PROG:=myapp" in (dist / "Makefile").read_text()

    def test_bin_executable(self, manifest):
        layout = pack(manifest, load_config(manifest.pack))
        for script in layout.bin_dir.iterdir():
            assert os.access(script, os.X_OK)

    def test_classifier_and_convention(self, manifest, build_dir):
        config = load_config(
            {**manifest.pack, "include_classifiers": ["sources"], "jar_name_convention": "full"}
        )
        layout = pack(manifest, config)
        assert layout.dependency_jar_names == [
            "com.example.foo-1.0.jar",
            "com.example.foo-1.0-sources.jar",
            "org.acme.bar-2.1.jar",
        ]

    def test_exclude_project(self, manifest, build_dir):
        config = load_config({**manifest.pack, "exclude": ["util"]})
        layout = pack(manifest, config)
        names = {p.name for p in layout.lib_dir.iterdir()}
        assert "util-1.0.jar" not in names
        assert "bar-2.1.jar" not in names

    def test_resource_dir_and_makefile_links(self, manifest, build_dir, make_jar):
        make_jar(build_dir / "src" / "pack" / "bin" / "helper.sh", "#!/bin/sh\n")
        make_jar(build_dir / "src" / "pack" / "etc" / "app.conf", "x=1")
        layout = pack(manifest, load_config(manifest.pack))
        assert (layout.dist_dir / "etc" / "app.conf").read_text() == "x=1"
        assert os.access(layout.bin_dir / "helper.sh", os.X_OK)
        makefile = (layout.dist_dir / "Makefile").read_text()
        assert '"$(PREFIX)/bin/helper.sh"' in makefile
        assert '"$(PREFIX)/bin/MyProg"' in makefile

    def test_mappings_relative_to_manifest(self, manifest, build_dir, make_jar):
        make_jar(build_dir / "LICENSE", "license")
        config = load_config(
            {**manifest.pack, "mappings": [{"file": "LICENSE", "path": "doc/LICENSE"}]}
        )
        layout = pack(manifest, config)
        assert (layout.dist_dir / "doc" / "LICENSE").read_text() == "license"

    def test_expanded_classpath_matches_files(self, manifest):
        config = load_config(
            {**manifest.pack, "expanded_classpath": True, "jar_name_convention": "no-version"}
        )
        layout = pack(manifest, config)
        script = (layout.bin_dir / "MyProg").read_text()
        for jar in layout.lib_dir.iterdir():
            assert f"${{PROG_HOME}}/lib/{jar.name}${{PSEP}}" in script

    def test_repack_removes_stale(self, manifest):
        config = load_config(manifest.pack)
        layout = pack(manifest, config)
        (layout.lib_dir / "stale.jar").write_text("old")
        pack(manifest, config)
        assert not (layout.lib_dir / "stale.jar").exists()

    def test_repack_identical(self, manifest, build_dir, make_jar):
        make_jar(build_dir / "src" / "pack" / "bin" / "helper.sh", "#!/bin/sh\n")
        config = load_config(manifest.pack)
        layout = pack(manifest, config)
        first = _snapshot(layout.bin_dir) | _snapshot(layout.lib_dir)
        pack(manifest, config)
        assert _snapshot(layout.bin_dir) | _snapshot(layout.lib_dir) == first
        assert "MyProg" in _snapshot(layout.bin_dir)

    def test_custom_template_relative_to_manifest(
        self, manifest, build_dir, make_jar, tmp_path_factory, monkeypatch
    ):
        make_jar(build_dir / "tpl" / "launch.sh.j2", "custom {{ main_class }}\n")
        monkeypatch.chdir(tmp_path_factory.mktemp("elsewhere"))
        config = load_config({**manifest.pack, "bash_template": "tpl/launch.sh.j2"})
        layout = pack(manifest, config)
        assert (layout.bin_dir / "MyProg").read_text() == "custom com.example.Main\n"

    def test_builtin_template_not_shadowed_by_cwd(
        self, manifest, make_jar, tmp_path_factory, monkeypatch
    ):
        cwd = tmp_path_factory.mktemp("cwd")
        make_jar(cwd / "launch.sh.j2", "shadowed\n")
        monkeypatch.chdir(cwd)
        layout = pack(manifest, load_config(manifest.pack))
        assert (layout.bin_dir / "MyProg").read_text().startswith("#!/usr/bin/env bash")

    def test_resolve_templates_keeps_builtin_names(self, manifest, build_dir):
        config = resolve_templates(manifest, load_config({"make_template": "tpl/Makefile.j2"}))
        assert config.bash_template == "launch.sh.j2"
        assert config.bat_template == "launch.bat.j2"
        assert config.make_template == str(build_dir.resolve() / "tpl" / "Makefile.j2")


class TestPackArchive:  # [JP-T006.2]
    """pack_archive 테스트."""

    def test_archive_name_and_stem(self, manifest, build_dir):
        config = load_config(manifest.pack)
        out = pack_archive(manifest, config)
        assert out == build_dir.resolve() / "target" / "myapp-1.0.0.tar.gz"
        assert out == archive_path_for(manifest, config)
        with tarfile.open(out, "r:gz") as tar:
            names = tar.getnames()
            mode = tar.getmember("myapp-1.0.0/bin/MyProg").mode
        assert names[0] == "myapp-1.0.0"
        assert "myapp-1.0.0/lib/foo-1.0.jar" in names
        assert "myapp-1.0.0/Makefile" not in names
        assert mode == 0o755

    def test_archive_prefix(self, manifest, build_dir):
        config = load_config({**manifest.pack, "archive_prefix": "dist"})
        out = pack_archive(manifest, config)
        assert out.name == "dist-1.0.0.tar.gz"
        with tarfile.open(out, "r:gz") as tar:
            assert tar.getnames()[0] == "dist-1.0.0"

    def test_custom_dirs(self, manifest, build_dir):
        config = load_config({"target_dir": "out", "pack_dir": "dist"})
        assert dist_dir_for(manifest, config) == build_dir.resolve() / "out" / "dist"


class TestCLI:  # [JP-T006.3]
    """CLI 테스트."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_pack(self, build_dir):
        result = runner.invoke(app, ["pack", "--manifest", str(build_dir / "jarpack.yaml")])
        assert result.exit_code == 0
        assert (build_dir / "target" / "pack" / "bin" / "MyProg").exists()

    def test_archive(self, build_dir):
        result = runner.invoke(app, ["archive", "-m", str(build_dir / "jarpack.yaml")])
        assert result.exit_code == 0
        assert (build_dir / "target" / "myapp-1.0.0.tar.gz").exists()

    def test_deps(self, build_dir):
        result = runner.invoke(app, ["deps", "-m", str(build_dir / "jarpack.yaml")])
        assert result.exit_code == 0
        assert "foo-1.0.jar" in result.stdout
        assert "bar-2.1.jar" in result.stdout

    def test_log_level_from_env_applies_before_manifest(self, build_dir, monkeypatch):
        monkeypatch.setenv("JARPACK_LOG_LEVEL", "WARNING")
        result = runner.invoke(app, ["deps", "-m", str(build_dir / "jarpack.yaml")])
        assert result.exit_code == 0
        assert "manifest_loaded" not in result.stdout
        assert "dependencies_collected" not in result.stdout

    def test_debug_level_shows_manifest_event(self, build_dir, monkeypatch):
        monkeypatch.setenv("JARPACK_LOG_LEVEL", "DEBUG")
        result = runner.invoke(app, ["deps", "-m", str(build_dir / "jarpack.yaml")])
        assert result.exit_code == 0
        assert "manifest_loaded" in result.stdout

    def test_deps_empty(self, tmp_path):
        path = tmp_path / "jarpack.yaml"
        path.write_text(
            yaml.dump({"name": "x", "version": "1", "root": "a", "projects": {"a": {}}})
        )
        result = runner.invoke(app, ["deps", "-m", str(path)])
        assert result.exit_code == 0
        assert "의존성이 없습니다" in result.stdout

    def test_manifest_from_env(self, build_dir, monkeypatch):
        monkeypatch.setenv("JARPACK_MANIFEST", str(build_dir / "jarpack.yaml"))
        result = runner.invoke(app, ["pack"])
        assert result.exit_code == 0

    def test_missing_manifest(self, tmp_path):
        result = runner.invoke(app, ["pack", "-m", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1

    def test_missing_jar_fails(self, build_dir):
        (build_dir / "repo" / "foo-1.0.jar").unlink()
        result = runner.invoke(app, ["pack", "-m", str(build_dir / "jarpack.yaml")])
        assert result.exit_code == 1
