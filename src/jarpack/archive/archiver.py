"""
[JP-E001] jarpack.archive.archiver
tar.gz 아카이버 - 소유자/권한 정규화 + 고정 최상위 디렉토리

version: 1.0.0
created: 2026-10-16
modified: 2026-10-16
"""

from __future__ import annotations

import gzip
import tarfile
from collections.abc import Collection
from pathlib import Path

import structlog

from jarpack.core.exceptions import ArchiveError

logger = structlog.get_logger()

EXCLUDED_FILES: frozenset[str] = frozenset({"Makefile", "VERSION"})  # [JP-E001.1]
BIN_MODE = 0o755
COMPRESS_LEVEL = 9
COPY_BUFFER_SIZE = 1024 * 1024


def archive_stem(prefix: str, version: str) -> str:
    return f"{prefix}-{version}"


def _normalize(info: tarfile.TarInfo, executable: bool) -> tarfile.TarInfo:
    info.uid = 0
    info.gid = 0
    info.uname = ""
    info.gname = ""
    if executable:
        info.mode = BIN_MODE
    return info


def _is_under_bin(relative: Path) -> bool:
    return relative.parts[:1] == ("bin",)


def _add_tree(
    tar: tarfile.TarFile,
    layout_dir: Path,
    directory: Path,
    stem: str,
    excluded: Collection[str],
) -> int:
    count = 0
    # 형제 항목은 이름순 (파일시스템 나열 순서와 무관하게 재현 가능)
    for path in sorted(directory.iterdir(), key=lambda p: p.name):
        relative = path.relative_to(layout_dir)
        if relative.as_posix() in excluded:
            continue
        info = tar.gettarinfo(str(path), arcname=f"{stem}/{relative.as_posix()}")
        _normalize(info, executable=_is_under_bin(relative))
        if info.isreg():
            with path.open("rb") as f:
                tar.addfile(info, f)
        else:
            tar.addfile(info)
        count += 1
        if path.is_dir() and not path.is_symlink():
            count += _add_tree(tar, layout_dir, path, stem, excluded)
    return count


def archive(
    layout_dir: Path,
    archive_path: Path,
    stem: str,
    excluded: Collection[str] = EXCLUDED_FILES,
) -> Path:  # [JP-E001.2]
    """layout_dir을 {stem}/ 아래로 묶은 tar.gz를 만듭니다.

    - stem 디렉토리 항목이 가장 먼저 들어갑니다.
    - 최상위 Makefile, VERSION은 제외됩니다 (디스크에는 남음).
    - 모든 항목의 uid/gid는 0, uname/gname은 빈 문자열입니다.
    - bin/ 아래 항목은 원본 권한과 무관하게 0755입니다.

    Raises:
        ArchiveError: 읽기/쓰기 실패. 불완전한 아카이브 파일은 지우지 않습니다.
    """
    logger.info("archive_generating", archive=str(archive_path), stem=stem)
    try:
        archive_path.parent.mkdir(parents=True, exist_ok=True)
        with (
            archive_path.open("wb") as raw,
            gzip.GzipFile(
                filename="", mode="wb", compresslevel=COMPRESS_LEVEL, fileobj=raw, mtime=0
            ) as gz,
            tarfile.open(fileobj=gz, mode="w", copybufsize=COPY_BUFFER_SIZE) as tar,
        ):
            root = tar.gettarinfo(str(layout_dir), arcname=stem)
            tar.addfile(_normalize(root, executable=False))
            count = _add_tree(tar, layout_dir, layout_dir, stem, excluded) + 1
    except OSError as e:
        msg = f"아카이브 생성 실패: {archive_path}: {e}"
        raise ArchiveError(msg) from e

    logger.info("archive_generated", archive=str(archive_path), entries=count)
    return archive_path
