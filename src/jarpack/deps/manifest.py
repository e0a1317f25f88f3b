"""
[JP-B003] jarpack.deps.manifest
빌드 매니페스트 - 업스트림 빌드가 만든 프로젝트 그래프/jar/의존성 리포트 로더

version: 1.0.0
created: 2026-10-16
modified: 2026-10-16
dependencies: pyyaml>=6.0, pydantic>=2.12
"""

from __future__ import annotations

from collections.abc import Collection
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from jarpack.core.exceptions import ManifestError
from jarpack.deps.collector import select_projects
from jarpack.deps.models import ConfigurationReport, UpdateReport

logger = structlog.get_logger()

DEFAULT_MANIFEST = "jarpack.yaml"  # [JP-B003.1]


class ProjectSpec(BaseModel):  # [JP-B003.2]
    """서브프로젝트 하나의 빌드 산출물."""

    model_config = {"frozen": True}

    uses: list[str] = Field(default_factory=list)
    jars: list[Path] = Field(default_factory=list)
    unmanaged_jars: list[Path] = Field(default_factory=list)
    reports: list[ConfigurationReport] = Field(default_factory=list)


class BuildManifest(BaseModel):  # [JP-B003.3]
    """업스트림 빌드 결과 전체. 모든 경로는 base_dir 기준 절대 경로로 정규화됩니다."""

    model_config = {"frozen": True}

    name: str
    version: str
    root: str
    projects: dict[str, ProjectSpec]
    base_dir: Path = Field(default_factory=Path.cwd)
    pack: dict[str, Any] = Field(default_factory=dict, description="PackConfig 값")

    @model_validator(mode="after")
    def _check_references(self) -> BuildManifest:
        if self.root not in self.projects:
            msg = f"root 프로젝트가 projects에 없습니다: {self.root}"
            raise ValueError(msg)
        for project, spec in self.projects.items():
            unknown = [u for u in spec.uses if u not in self.projects]
            if unknown:
                msg = f"'{project}'이(가) 알 수 없는 프로젝트를 사용합니다: {unknown}"
                raise ValueError(msg)
        return self

    @property
    def uses(self) -> dict[str, list[str]]:
        return {name: spec.uses for name, spec in self.projects.items()}

    def selected_projects(self, exclude: Collection[str] = ()) -> list[str]:  # [JP-B003.4]
        """root에서 도달 가능한 프로젝트 중 제외 목록을 뺀 것."""
        return select_projects(self.root, self.uses, exclude)

    def project_jars(self, exclude: Collection[str] = ()) -> list[Path]:  # [JP-B003.5]
        return [
            self._resolve(jar)
            for project in self.selected_projects(exclude)
            for jar in self.projects[project].jars
        ]

    def unmanaged_jars(self, exclude: Collection[str] = ()) -> list[Path]:  # [JP-B003.6]
        return [
            self._resolve(jar)
            for project in self.selected_projects(exclude)
            for jar in self.projects[project].unmanaged_jars
        ]

    def update_reports(self, exclude: Collection[str] = ()) -> list[UpdateReport]:  # [JP-B003.7]
        """선택된 프로젝트별 의존성 리포트. 아티팩트 경로는 절대 경로로 바뀝니다."""
        reports: list[UpdateReport] = []
        for project in self.selected_projects(exclude):
            configurations = [
                self._resolve_report(config) for config in self.projects[project].reports
            ]
            reports.append(UpdateReport(project=project, configurations=configurations))
        return reports

    def resolve_path(self, path: str | Path) -> Path:
        return self._resolve(Path(path))

    def _resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else self.base_dir / path

    def _resolve_report(self, config: ConfigurationReport) -> ConfigurationReport:
        modules = [
            module.model_copy(
                update={
                    "artifacts": [
                        entry.model_copy(update={"file": self._resolve(entry.file)})
                        for entry in module.artifacts
                    ]
                }
            )
            for module in config.modules
        ]
        return config.model_copy(update={"modules": modules})


def load_manifest(path: Path) -> BuildManifest:  # [JP-B003.8]
    """YAML 매니페스트를 로드합니다. 상대 경로는 매니페스트 디렉토리 기준입니다.

    Raises:
        ManifestError: 파일이 없거나, YAML/스키마가 잘못되었으면
    """
    if not path.exists():
        msg = f"매니페스트 파일이 없습니다: {path}"
        raise ManifestError(msg)

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        msg = f"YAML 파싱 오류 ({path}): {e}"
        raise ManifestError(msg) from e

    if not isinstance(data, dict):
        msg = f"매니페스트가 유효한 딕셔너리가 아닙니다: {path}"
        raise ManifestError(msg)

    data.setdefault("base_dir", str(path.resolve().parent))
    data["pack"] = data.get("pack") or {}
    try:
        manifest = BuildManifest(**data)
    except ValidationError as e:
        msg = f"매니페스트 검증 실패 ({path}): {e}"
        raise ManifestError(msg) from e

    logger.debug(
        "manifest_loaded",
        path=str(path),
        name=manifest.name,
        version=manifest.version,
        projects=len(manifest.projects),
    )
    return manifest
