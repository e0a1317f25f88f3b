"""
[JP-B002] jarpack.deps.collector
의존성 수집기 - 프로젝트 도달성 탐색 + runtime 리포트 병합/필터링

version: 1.0.0
created: 2026-10-16
modified: 2026-10-16
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable, Iterator, Mapping, Sequence
from typing import TYPE_CHECKING

import structlog

from jarpack.deps.models import (
    RUNTIME_CONFIGURATION,
    Artifact,
    ModuleId,
    ModuleIdentity,
    ResolvedDependencySet,
)

if TYPE_CHECKING:
    from pathlib import Path

    from jarpack.deps.models import UpdateReport

logger = structlog.get_logger()

# (configuration, module, artifact) -> 포함 여부
DependencyFilter = Callable[[str, ModuleId, Artifact], bool]


def all_pass(configuration: str, module: ModuleId, artifact: Artifact) -> bool:  # [JP-B002.1]
    """기본 의존성 필터. 모두 통과."""
    return True


def select_projects(
    root: str,
    uses: Mapping[str, Sequence[str]],
    exclude: Collection[str] = (),
) -> list[str]:  # [JP-B002.2]
    """root에서 uses 관계로 도달 가능한 프로젝트 목록 (깊이 우선, 중복 제거).

    제외된 프로젝트도 탐색은 하므로 그 하위 프로젝트는 결과에 남습니다.

    Args:
        root: 시작 프로젝트 이름
        uses: 프로젝트 -> 직접 사용하는 프로젝트 목록
        exclude: 결과에서 뺄 프로젝트 이름

    Returns:
        root가 먼저 오는 프로젝트 이름 목록
    """
    visited: list[str] = []
    seen: set[str] = set()
    stack = [root]
    while stack:
        project = stack.pop()
        if project in seen:
            continue
        seen.add(project)
        visited.append(project)
        # 선언 순서대로 방문하도록 역순으로 push
        stack.extend(reversed(uses.get(project, ())))

    return [p for p in visited if p not in exclude]


def _runtime_pairs(
    reports: Iterable[UpdateReport],
    include_classifiers: Collection[str],
    dependency_filter: DependencyFilter,
) -> Iterator[tuple[ModuleIdentity, Path]]:
    for report in reports:
        for config in report.configurations:
            if config.configuration != RUNTIME_CONFIGURATION:
                continue
            for module_report in config.modules:
                mid = module_report.module
                for entry in module_report.artifacts:
                    if not dependency_filter(config.configuration, mid, entry.artifact):
                        continue
                    classifier = entry.artifact.classifier
                    if classifier is not None and classifier not in include_classifiers:
                        continue
                    identity = ModuleIdentity(
                        organization=mid.organization,
                        name=mid.name,
                        revision=mid.revision,
                        classifier=classifier,
                        original_file_name=entry.file.name,
                    )
                    yield identity, entry.file


def collect_dependencies(
    reports: Iterable[UpdateReport],
    include_classifiers: Collection[str] = frozenset(),
    dependency_filter: DependencyFilter = all_pass,
) -> ResolvedDependencySet:  # [JP-B002.3]
    """모든 프로젝트의 runtime 리포트를 하나의 정렬된 의존성 집합으로 병합합니다.

    classifier가 없는 아티팩트는 항상 포함되고, classifier가 있으면
    include_classifiers에 들어 있을 때만 포함됩니다.
    """
    resolved = ResolvedDependencySet(
        _runtime_pairs(reports, include_classifiers, dependency_filter)
    )
    logger.info(
        "dependencies_collected",
        count=len(resolved),
        include_classifiers=sorted(include_classifiers),
    )
    return resolved
