"""
[JP-B001] jarpack.deps.models
의존성 모델 - 모듈 식별자, jar 이름 규칙, 의존성 리포트

version: 1.0.0
created: 2026-10-16
modified: 2026-10-16
dependencies: pydantic>=2.12
"""

from __future__ import annotations

import functools
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path  # noqa: TC003 - Pydantic needs Path at runtime

from pydantic import BaseModel, Field

from jarpack.core.types import JarNameConvention

RUNTIME_CONFIGURATION = "runtime"  # [JP-B001.1]


@functools.total_ordering
@dataclass(frozen=True)
class ModuleIdentity:  # [JP-B001.2]
    """패키징되는 jar 하나를 식별하는 (organization, name, revision, classifier).

    original_file_name은 동등성/정렬에 참여하지 않습니다.
    """

    organization: str
    name: str
    revision: str
    classifier: str | None = None
    original_file_name: str = field(default="", compare=False)

    def __str__(self) -> str:
        return f"{self.organization}:{self.name}:{self.revision}{self._classifier_suffix}"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ModuleIdentity):
            return NotImplemented
        return self.sort_key < other.sort_key

    @property
    def sort_key(self) -> tuple[str, str, str, bool, str]:  # [JP-B001.3]
        """classifier가 없는 항목이 있는 항목보다 앞에 옵니다."""
        return (
            self.organization,
            self.name,
            self.revision,
            self.classifier is not None,
            self.classifier or "",
        )

    @property
    def _classifier_suffix(self) -> str:
        return f"-{self.classifier}" if self.classifier is not None else ""

    @property
    def jar_name(self) -> str:
        return f"{self.name}-{self.revision}{self._classifier_suffix}.jar"

    @property
    def full_jar_name(self) -> str:
        return f"{self.organization}.{self.name}-{self.revision}{self._classifier_suffix}.jar"

    @property
    def no_version_jar_name(self) -> str:
        return f"{self.organization}.{self.name}{self._classifier_suffix}.jar"

    def file_name(self, convention: JarNameConvention) -> str:  # [JP-B001.4]
        """규칙에 맞는 lib/ 파일명.

        레이아웃 복사와 클래스패스 생성이 모두 이 함수를 거쳐야 스크립트와
        실제 파일명이 일치합니다.
        """
        if convention == JarNameConvention.ORIGINAL:
            return self.original_file_name
        if convention == JarNameConvention.FULL:
            return self.full_jar_name
        if convention == JarNameConvention.NO_VERSION:
            return self.no_version_jar_name
        return self.jar_name


class ResolvedDependencySet(Mapping[ModuleIdentity, Path]):  # [JP-B001.5]
    """ModuleIdentity -> 파일 경로. 항상 식별자 정렬 순서로 순회합니다."""

    def __init__(self, pairs: Iterable[tuple[ModuleIdentity, Path]] = ()) -> None:
        merged: dict[ModuleIdentity, Path] = {}
        for identity, file in pairs:
            # 같은 식별자는 나중 항목이 키(original_file_name 포함)까지 덮어씀
            merged.pop(identity, None)
            merged[identity] = file
        self._entries = dict(sorted(merged.items(), key=lambda kv: kv[0].sort_key))

    def __getitem__(self, key: ModuleIdentity) -> Path:
        return self._entries[key]

    def __iter__(self) -> Iterator[ModuleIdentity]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ResolvedDependencySet({[str(m) for m in self._entries]})"

    def file_names(self, convention: JarNameConvention) -> list[str]:  # [JP-B001.6]
        """정렬 순서대로 규칙에 맞는 jar 파일명 목록."""
        return [identity.file_name(convention) for identity in self._entries]


# --- 업스트림 의존성 리포트 모델 ---------------------------------------------------


class ModuleId(BaseModel):  # [JP-B001.7]
    """리포트 안의 모듈 좌표."""

    model_config = {"frozen": True}

    organization: str
    name: str
    revision: str


class Artifact(BaseModel):  # [JP-B001.8]
    """모듈이 내보내는 아티팩트 하나."""

    model_config = {"frozen": True}

    name: str
    type: str = "jar"
    extension: str = "jar"
    classifier: str | None = None


class ArtifactFile(BaseModel):  # [JP-B001.9]
    """아티팩트와 해석된 파일 경로 쌍."""

    model_config = {"frozen": True}

    artifact: Artifact
    file: Path


class ModuleReport(BaseModel):  # [JP-B001.10]
    model_config = {"frozen": True}

    module: ModuleId
    artifacts: list[ArtifactFile] = Field(default_factory=list)


class ConfigurationReport(BaseModel):  # [JP-B001.11]
    model_config = {"frozen": True}

    configuration: str
    modules: list[ModuleReport] = Field(default_factory=list)


class UpdateReport(BaseModel):  # [JP-B001.12]
    """프로젝트 하나의 의존성 해석 결과."""

    model_config = {"frozen": True}

    project: str
    configurations: list[ConfigurationReport] = Field(default_factory=list)
