"""
[JP-C001] jarpack.layout.builder
배포 레이아웃 빌더 - lib/, bin/ 생성 + jar/리소스 복사 + 실행 권한

version: 1.0.0
created: 2026-10-16
modified: 2026-10-16
"""

from __future__ import annotations

import shutil
import stat
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from jarpack.core.exceptions import LayoutError

if TYPE_CHECKING:
    from jarpack.core.config import ExtraMapping
    from jarpack.core.types import JarNameConvention
    from jarpack.deps.models import ResolvedDependencySet

logger = structlog.get_logger()

LIB_DIR = "lib"
BIN_DIR = "bin"


@dataclass(frozen=True)
class PackageLayout:  # [JP-C001.1]
    """build_layout이 만든 배포 디렉토리와 lib/ jar 이름 목록."""

    dist_dir: Path
    project_jar_names: list[str] = field(default_factory=list)
    dependency_jar_names: list[str] = field(default_factory=list)
    unmanaged_jar_names: list[str] = field(default_factory=list)

    @property
    def lib_dir(self) -> Path:
        return self.dist_dir / LIB_DIR

    @property
    def bin_dir(self) -> Path:
        return self.dist_dir / BIN_DIR

    @property
    def classpath_jar_names(self) -> list[str]:
        """클래스패스 순서: 프로젝트 jar, 의존성 (정렬 순서), unmanaged jar."""
        return [*self.project_jar_names, *self.dependency_jar_names, *self.unmanaged_jar_names]


def _copy(src: Path, dst: Path, *, preserve_mtime: bool = True) -> None:
    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
        if preserve_mtime:
            shutil.copy2(src, dst)
        else:
            shutil.copyfile(src, dst)
    except OSError as e:
        msg = f"파일 복사 실패: {src} -> {dst}: {e}"
        raise LayoutError(msg) from e


def build_layout(
    dist_dir: Path,
    project_jars: Sequence[Path],
    resolved: ResolvedDependencySet,
    unmanaged_jars: Sequence[Path],
    mappings: Iterable[ExtraMapping],
    convention: JarNameConvention,
) -> PackageLayout:  # [JP-C001.2]
    """배포 디렉토리를 새로 만들고 jar와 추가 파일을 복사합니다.

    기존 dist_dir은 통째로 지워지므로 같은 입력으로 다시 실행하면 같은
    결과가 나오고, 이전 실행의 파일은 남지 않습니다.

    Raises:
        LayoutError: 삭제/생성/복사 중 I/O 에러
    """
    logger.info("layout_build_started", dist_dir=str(dist_dir))
    try:
        if dist_dir.exists():
            shutil.rmtree(dist_dir)
        (dist_dir / LIB_DIR).mkdir(parents=True)
        (dist_dir / BIN_DIR).mkdir()
    except OSError as e:
        msg = f"배포 디렉토리를 준비할 수 없습니다: {dist_dir}: {e}"
        raise LayoutError(msg) from e

    lib_dir = dist_dir / LIB_DIR

    # 1. 프로젝트 jar (같은 이름이면 나중 것이 남음)
    project_jar_names = [jar.name for jar in project_jars]
    logger.info("project_jars", jars=[str(jar) for jar in project_jars])
    for jar in project_jars:
        _copy(jar, lib_dir / jar.name, preserve_mtime=False)

    # 2. 해석된 의존성
    dependency_jar_names: list[str] = []
    logger.info("project_dependencies", modules=[str(m) for m in resolved])
    for identity, file in resolved.items():
        target_name = identity.file_name(convention)
        _copy(file, lib_dir / target_name)
        dependency_jar_names.append(target_name)

    # 3. unmanaged jar
    unmanaged_jar_names = [jar.name for jar in unmanaged_jars]
    logger.info("unmanaged_dependencies", jars=[str(jar) for jar in unmanaged_jars])
    for jar in unmanaged_jars:
        _copy(jar, lib_dir / jar.name)

    # 4. 명시적 매핑
    for mapping in mappings:
        logger.info("explicit_dependency", file=str(mapping.file), path=mapping.path)
        _copy(mapping.file, dist_dir / mapping.path)

    return PackageLayout(
        dist_dir=dist_dir,
        project_jar_names=project_jar_names,
        dependency_jar_names=dependency_jar_names,
        unmanaged_jar_names=unmanaged_jar_names,
    )


def copy_resource_dirs(dist_dir: Path, resource_dirs: Iterable[Path]) -> None:  # [JP-C001.3]
    """리소스 디렉토리 내용을 dist_dir 루트에 덮어쓰며 복사합니다 (mtime 보존).

    존재하지 않는 리소스 디렉토리는 건너뜁니다.
    """
    for resource_dir in resource_dirs:
        if not resource_dir.is_dir():
            logger.debug("resource_dir_missing", dir=str(resource_dir))
            continue
        logger.info("resource_dir_copied", dir=str(resource_dir))
        try:
            shutil.copytree(resource_dir, dist_dir, dirs_exist_ok=True, copy_function=shutil.copy2)
        except OSError as e:
            msg = f"리소스 디렉토리 복사 실패: {resource_dir}: {e}"
            raise LayoutError(msg) from e


def mark_executable(bin_dir: Path, all_users: bool = True) -> list[Path]:  # [JP-C001.4]
    """bin/ 바로 아래 파일에 실행 권한을 부여합니다.

    Args:
        bin_dir: 대상 디렉토리
        all_users: True면 group/other에도 실행 권한

    Returns:
        권한을 바꾼 파일 목록
    """
    bits = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH if all_users else stat.S_IXUSR
    changed: list[Path] = []
    try:
        for path in sorted(bin_dir.iterdir()):
            if not path.is_file():
                continue
            path.chmod(path.stat().st_mode | bits)
            changed.append(path)
    except OSError as e:
        msg = f"실행 권한 설정 실패: {bin_dir}: {e}"
        raise LayoutError(msg) from e
    return changed
