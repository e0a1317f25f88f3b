"""
[JP-F001] jarpack.pipeline
패키징 파이프라인 - 의존성 수집 -> 레이아웃 -> 런처 -> 리소스 -> 권한 -> 아카이브

version: 1.0.0
created: 2026-10-16
modified: 2026-10-16
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from jarpack.archive.archiver import archive, archive_stem
from jarpack.deps.collector import collect_dependencies
from jarpack.launcher.generator import BUILTIN_TEMPLATES, LauncherGenerator
from jarpack.layout.builder import build_layout, copy_resource_dirs, mark_executable

if TYPE_CHECKING:
    from pathlib import Path

    from jarpack.core.config import PackConfig
    from jarpack.core.types import TemplateRenderer
    from jarpack.deps.manifest import BuildManifest
    from jarpack.deps.models import ResolvedDependencySet
    from jarpack.layout.builder import PackageLayout

logger = structlog.get_logger()


def dist_dir_for(manifest: BuildManifest, config: PackConfig) -> Path:  # [JP-F001.1]
    return manifest.resolve_path(config.target_dir) / config.pack_dir


def archive_path_for(manifest: BuildManifest, config: PackConfig) -> Path:  # [JP-F001.2]
    prefix = config.archive_prefix or manifest.name
    stem = archive_stem(prefix, manifest.version)
    return manifest.resolve_path(config.target_dir) / f"{stem}.tar.gz"


def resolve_templates(manifest: BuildManifest, config: PackConfig) -> PackConfig:
    """내장 이름이 아닌 템플릿 ID를 매니페스트 디렉토리 기준 경로로 바꿉니다."""
    updates: dict[str, str] = {}
    for key in ("bash_template", "bat_template", "make_template"):
        template_id = getattr(config, key)
        if template_id not in BUILTIN_TEMPLATES:
            updates[key] = str(manifest.resolve_path(template_id))
    return config.model_copy(update=updates) if updates else config


def resolve_dependencies(manifest: BuildManifest, config: PackConfig) -> ResolvedDependencySet:
    """선택된 프로젝트의 runtime 의존성을 수집합니다."""
    return collect_dependencies(
        manifest.update_reports(config.exclude),
        include_classifiers=config.include_classifiers,
    )


def pack(
    manifest: BuildManifest,
    config: PackConfig,
    renderer: TemplateRenderer | None = None,
) -> PackageLayout:  # [JP-F001.3]
    """배포 디렉토리를 처음부터 다시 만듭니다. 실패하면 그 자리에서 중단됩니다."""
    dist_dir = dist_dir_for(manifest, config)
    logger.info("pack_started", project=manifest.name, dist_dir=str(dist_dir))

    resolved = resolve_dependencies(manifest, config)
    mappings = [
        mapping.model_copy(update={"file": manifest.resolve_path(mapping.file)})
        for mapping in config.mappings
    ]
    layout = build_layout(
        dist_dir,
        project_jars=manifest.project_jars(config.exclude),
        resolved=resolved,
        unmanaged_jars=manifest.unmanaged_jars(config.exclude),
        mappings=mappings,
        convention=config.jar_name_convention,
    )

    resource_dirs = [manifest.resolve_path(d) for d in config.resource_dirs]
    generator = LauncherGenerator(
        resolve_templates(manifest, config), manifest.name, manifest.version, renderer
    )
    generator.generate(layout, resource_dirs)

    # 리소스는 생성 파일 뒤에 복사되어 같은 이름이면 덮어씀
    copy_resource_dirs(dist_dir, resource_dirs)
    mark_executable(layout.bin_dir, all_users=config.executable_by_all)

    logger.info("pack_done", dist_dir=str(dist_dir))
    return layout


def pack_archive(
    manifest: BuildManifest,
    config: PackConfig,
    renderer: TemplateRenderer | None = None,
) -> Path:  # [JP-F001.4]
    """pack 후 <target_dir>/{prefix}-{version}.tar.gz를 만듭니다."""
    layout = pack(manifest, config, renderer)
    prefix = config.archive_prefix or manifest.name
    return archive(
        layout.dist_dir,
        archive_path_for(manifest, config),
        stem=archive_stem(prefix, manifest.version),
    )
