"""
[JP-A002] jarpack.core.config
pydantic-settings 기반 패키징 설정 관리

version: 1.0.0
created: 2026-10-16
modified: 2026-10-16
dependencies: pydantic-settings>=2.13
"""

from __future__ import annotations

from pathlib import Path  # noqa: TC003 - Pydantic needs Path at runtime
from typing import Any

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from jarpack.core.exceptions import ConfigError
from jarpack.core.types import JarNameConvention

DEFAULT_RESOURCE_DIRECTORY = "src/pack"  # [JP-A002.1]


class ExtraMapping(BaseModel):  # [JP-A002.2]
    """배포 디렉토리에 추가로 복사할 파일 (원본 파일 -> 상대 경로)."""

    model_config = {"frozen": True}

    file: Path
    path: str


class PackConfig(BaseSettings):  # [JP-A002.3]
    """패키징 설정. 한 번 만들어지면 변경되지 않습니다.

    매니페스트의 pack: 섹션 값이 환경변수(JARPACK_*)보다 우선합니다.
    """

    model_config = SettingsConfigDict(env_prefix="JARPACK_", frozen=True)

    pack_dir: str = Field(default="pack", description="target_dir 아래 출력 디렉토리 이름")
    target_dir: str = Field(default="target", description="빌드 출력 디렉토리")
    bash_template: str = Field(default="launch.sh.j2")
    bat_template: str = Field(default="launch.bat.j2")
    make_template: str = Field(default="Makefile.j2")
    main: dict[str, str] = Field(default_factory=dict, description="프로그램 이름 -> 메인 클래스")
    exclude: list[str] = Field(default_factory=list, description="패키징에서 제외할 프로젝트")
    mac_icon_file: str = Field(default="icon-mac.png")
    resource_dirs: list[str] = Field(default_factory=lambda: [DEFAULT_RESOURCE_DIRECTORY])
    jvm_opts: dict[str, list[str]] = Field(default_factory=dict)
    extra_classpath: dict[str, list[str]] = Field(default_factory=dict)
    expanded_classpath: bool = Field(
        default=False, description="와일드카드 대신 jar 목록을 클래스패스에 전개"
    )
    jar_name_convention: JarNameConvention = JarNameConvention.DEFAULT
    generate_windows_bat: bool = Field(default=True)
    include_classifiers: frozenset[str] = Field(default_factory=frozenset)
    archive_prefix: str | None = Field(default=None, description="None이면 프로젝트 이름")
    mappings: list[ExtraMapping] = Field(default_factory=list)
    executable_by_all: bool = Field(default=True, description="bin/ 파일을 group/other도 실행 가능")
    log_level: str = Field(default="INFO")


def load_config(values: dict[str, Any] | None = None) -> PackConfig:  # [JP-A002.4]
    """딕셔너리(보통 매니페스트의 pack: 섹션)에서 설정을 만듭니다.

    Raises:
        ConfigError: 값 검증에 실패하면
    """
    try:
        return PackConfig(**(values or {}))
    except ValidationError as e:
        msg = f"잘못된 패키징 설정: {e}"
        raise ConfigError(msg) from e
