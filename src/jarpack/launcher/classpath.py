"""
[JP-D002] jarpack.launcher.classpath
런처 스크립트용 클래스패스 문자열 생성 + Windows 변환

version: 1.0.0
created: 2026-10-16
modified: 2026-10-16
"""

from __future__ import annotations

from collections.abc import Iterable

PROG_HOME = "${PROG_HOME}"  # [JP-D002.1]
WINDOWS_PROG_HOME = "%PROG_HOME%"
UNIX_PATH_SEPARATOR = "${PSEP}"
WINDOWS_PATH_SEPARATOR = "%PSEP%"
LIB_PREFIX = f"{PROG_HOME}/lib/"


def extra_classpath(entries: Iterable[str], separator: str = UNIX_PATH_SEPARATOR) -> str:
    """각 항목 뒤에 구분자를 붙여 이어 붙입니다. 항목이 없으면 빈 문자열."""
    return "".join(f"{entry}{separator}" for entry in entries)


def expanded_classpath(
    jar_names: Iterable[str], separator: str = UNIX_PATH_SEPARATOR
) -> str:  # [JP-D002.2]
    """lib/ 아래 jar 전체를 ${PROG_HOME}/lib/<jar><구분자> 형태로 전개합니다."""
    return "".join(f"{LIB_PREFIX}{name}{separator}" for name in jar_names)


def to_windows_classpath(classpath: str) -> str:  # [JP-D002.3]
    """배치 스크립트용 변환: 구분자, PROG_HOME 변수 문법, 경로 구분자.

    extra/expanded 클래스패스 모두 이 함수로 변환해야 합니다.
    """
    return (
        classpath.replace(UNIX_PATH_SEPARATOR, WINDOWS_PATH_SEPARATOR)
        .replace(PROG_HOME, WINDOWS_PROG_HOME)
        .replace("/", "\\")
    )
