"""
[JP-A003] jarpack.core.exceptions
커스텀 예외 계층 구조

version: 1.0.0
created: 2026-10-16
modified: 2026-10-16
"""


class JarpackError(Exception):  # [JP-A003.1]
    """jarpack 기본 예외. 모든 커스텀 예외의 부모."""


class ConfigError(JarpackError):  # [JP-A003.2]
    """설정 관련 에러."""


class ManifestError(ConfigError):  # [JP-A003.3]
    """빌드 매니페스트 로드/검증 에러."""


class LayoutError(JarpackError):  # [JP-A003.4]
    """배포 디렉토리 생성/복사 중 I/O 에러."""


class ArchiveError(JarpackError):  # [JP-A003.5]
    """아카이브 쓰기 에러. 불완전한 아카이브 파일은 디스크에 남습니다."""
