"""
[JP-T000] tests.conftest
공통 테스트 픽스처

version: 1.0.0
created: 2026-10-16
"""

from pathlib import Path

import pytest
import yaml

from jarpack.core.config import PackConfig
from jarpack.deps.manifest import BuildManifest, load_manifest


def _make_jar(path: Path, content: str | None = None) -> Path:
    """테스트용 가짜 jar 파일 생성 헬퍼."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content if content is not None else f"jar:{path.name}")
    return path


def runtime_module(org: str, name: str, rev: str, file: str, classifier: str | None = None):
    """매니페스트용 runtime 모듈 항목."""
    return {
        "module": {"organization": org, "name": name, "revision": rev},
        "artifacts": [{"artifact": {"name": name, "classifier": classifier}, "file": file}],
    }


@pytest.fixture
def make_jar():
    """가짜 jar 생성 함수."""
    return _make_jar


@pytest.fixture
def config() -> PackConfig:
    """테스트용 설정."""
    return PackConfig(main={"My Prog": "com.example.Main"}, log_level="DEBUG")


@pytest.fixture
def build_dir(tmp_path: Path) -> Path:
    """샘플 멀티 프로젝트 빌드 (core -> util, core -> docs)."""
    _make_jar(tmp_path / "core" / "target" / "core-1.0.jar")
    _make_jar(tmp_path / "util" / "target" / "util-1.0.jar")
    _make_jar(tmp_path / "docs" / "target" / "docs-1.0.jar")
    _make_jar(tmp_path / "core" / "lib" / "legacy.jar")
    _make_jar(tmp_path / "repo" / "foo-1.0.jar")
    _make_jar(tmp_path / "repo" / "foo-1.0-sources.jar")
    _make_jar(tmp_path / "repo" / "bar-2.1.jar")
    _make_jar(tmp_path / "repo" / "test-lib-0.1.jar")

    manifest = {
        "name": "myapp",
        "version": "1.0.0",
        "root": "core",
        "projects": {
            "core": {
                "uses": ["util", "docs"],
                "jars": ["core/target/core-1.0.jar"],
                "unmanaged_jars": ["core/lib/legacy.jar"],
                "reports": [
                    {
                        "configuration": "runtime",
                        "modules": [
                            runtime_module("com.example", "foo", "1.0", "repo/foo-1.0.jar"),
                            runtime_module(
                                "com.example",
                                "foo",
                                "1.0",
                                "repo/foo-1.0-sources.jar",
                                classifier="sources",
                            ),
                        ],
                    },
                    {
                        "configuration": "test",
                        "modules": [
                            runtime_module("org.test", "test-lib", "0.1", "repo/test-lib-0.1.jar")
                        ],
                    },
                ],
            },
            "util": {
                "jars": ["util/target/util-1.0.jar"],
                "reports": [
                    {
                        "configuration": "runtime",
                        "modules": [runtime_module("org.acme", "bar", "2.1", "repo/bar-2.1.jar")],
                    }
                ],
            },
            "docs": {"jars": ["docs/target/docs-1.0.jar"]},
        },
        "pack": {"main": {"My Prog": "com.example.Main"}},
    }
    (tmp_path / "jarpack.yaml").write_text(yaml.dump(manifest, allow_unicode=True))
    return tmp_path


@pytest.fixture
def manifest(build_dir: Path) -> BuildManifest:
    return load_manifest(build_dir / "jarpack.yaml")
