"""
[JP-A004] jarpack.core.types
공통 타입 정의

version: 1.0.0
created: 2026-10-16
modified: 2026-10-16
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Any


class JarNameConvention(StrEnum):  # [JP-A004.1]
    """의존성 jar 파일명 규칙."""

    DEFAULT = "default"
    ORIGINAL = "original"
    FULL = "full"
    NO_VERSION = "no-version"


# 템플릿 렌더러: (템플릿 ID, 변수 맵) -> 렌더링 결과
TemplateRenderer = Callable[[str, Mapping[str, Any]], str]
