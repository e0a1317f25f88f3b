"""
[JP-D001] jarpack.launcher.generator
런처 생성기 - 프로그램별 bash/bat 스크립트 + Makefile + VERSION 렌더링

version: 1.0.0
created: 2026-10-16
modified: 2026-10-16
dependencies: jinja2>=3.1
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import jinja2
import structlog

from jarpack.core.exceptions import LayoutError
from jarpack.launcher.classpath import (
    UNIX_PATH_SEPARATOR,
    WINDOWS_PATH_SEPARATOR,
    expanded_classpath,
    extra_classpath,
    to_windows_classpath,
)

if TYPE_CHECKING:
    from jarpack.core.config import PackConfig
    from jarpack.core.types import TemplateRenderer
    from jarpack.layout.builder import PackageLayout

logger = structlog.get_logger()

TEMPLATE_DIR = Path(__file__).parent / "templates"  # [JP-D001.1]
BUILTIN_TEMPLATES: frozenset[str] = frozenset({"launch.sh.j2", "launch.bat.j2", "Makefile.j2"})


class JinjaTemplateRenderer:  # [JP-D001.2]
    """Jinja2 템플릿 렌더러.

    내장 템플릿 이름은 항상 templates/ 디렉토리에서 읽고, 그 외 ID는 존재하는
    파일 경로면 그 파일을 사용합니다. 누락된 변수는 렌더링 시 에러입니다.
    """

    def __init__(self, template_dir: Path | None = None) -> None:
        self.jinja_env = jinja2.Environment(  # nosec B701 - shell scripts, not HTML
            loader=jinja2.FileSystemLoader(str(template_dir or TEMPLATE_DIR)),
            autoescape=False,
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=True,
        )

    def __call__(self, template_id: str, variables: Mapping[str, Any]) -> str:
        path = Path(template_id)
        if template_id not in BUILTIN_TEMPLATES and path.is_file():
            template = self.jinja_env.from_string(path.read_text(encoding="utf-8"))
        else:
            template = self.jinja_env.get_template(template_id)
        return template.render(**variables)


@dataclass(frozen=True)
class LaunchEntry:  # [JP-D001.3]
    """프로그램 하나의 런처 설정."""

    name: str
    main_class: str
    jvm_opts: tuple[str, ...] = ()
    extra_classpath: tuple[str, ...] = ()

    @property
    def script_name(self) -> str:
        """bin/ 파일명. 공백을 모두 제거합니다."""
        return re.sub(r"\s+", "", self.name)


def launch_entries(config: PackConfig) -> list[LaunchEntry]:  # [JP-D001.4]
    """설정의 main 테이블에서 LaunchEntry 목록을 만듭니다."""
    return [
        LaunchEntry(
            name=name,
            main_class=main_class,
            jvm_opts=tuple(config.jvm_opts.get(name, ())),
            extra_classpath=tuple(config.extra_classpath.get(name, ())),
        )
        for name, main_class in config.main.items()
    ]


@dataclass(frozen=True)
class LaunchScriptVars:  # [JP-D001.5]
    """launch.sh / launch.bat 템플릿 변수."""

    prog_name: str
    prog_version: str
    main_class: str
    mac_icon_file: str
    jvm_opts: str
    extra_classpath: str
    expanded_classpath: str | None = None

    def to_mapping(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MakefileVars:  # [JP-D001.6]
    """Makefile 템플릿 변수."""

    prog_name: str
    prog_symlink: str

    def to_mapping(self) -> dict[str, Any]:
        return asdict(self)


def link_to_script(name: str) -> str:
    return f'\tln -sf "../$(PROG)/current/bin/{name}" "$(PREFIX)/bin/{name}"'


class LauncherGenerator:  # [JP-D001.7]
    """bin/ 런처 스크립트와 Makefile, VERSION 파일을 생성합니다."""

    def __init__(
        self,
        config: PackConfig,
        project_name: str,
        version: str,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.project_name = project_name
        self.version = version
        self.renderer: TemplateRenderer = renderer or JinjaTemplateRenderer()

    def launch_vars(self, entry: LaunchEntry, layout: PackageLayout) -> LaunchScriptVars:
        """Unix 런처 변수."""
        expanded = (
            expanded_classpath(layout.classpath_jar_names, UNIX_PATH_SEPARATOR)
            if self.config.expanded_classpath
            else None
        )
        return LaunchScriptVars(
            prog_name=entry.name,
            prog_version=self.version,
            main_class=entry.main_class,
            mac_icon_file=self.config.mac_icon_file,
            jvm_opts=" ".join(f'"{opt}"' for opt in entry.jvm_opts),
            extra_classpath=extra_classpath(entry.extra_classpath, UNIX_PATH_SEPARATOR),
            expanded_classpath=expanded,
        )

    def windows_vars(self, entry: LaunchEntry, layout: PackageLayout) -> LaunchScriptVars:
        """Windows 배치 변수. extra/expanded 클래스패스에 같은 변환을 적용합니다."""
        unix = self.launch_vars(entry, layout)
        expanded = (
            to_windows_classpath(
                expanded_classpath(layout.classpath_jar_names, WINDOWS_PATH_SEPARATOR)
            )
            if self.config.expanded_classpath
            else None
        )
        return LaunchScriptVars(
            prog_name=unix.prog_name,
            prog_version=unix.prog_version,
            main_class=unix.main_class,
            mac_icon_file=unix.mac_icon_file,
            jvm_opts=unix.jvm_opts,
            extra_classpath=to_windows_classpath(
                extra_classpath(entry.extra_classpath, WINDOWS_PATH_SEPARATOR)
            ),
            expanded_classpath=expanded,
        )

    def makefile_vars(
        self, entries: Iterable[LaunchEntry], resource_dirs: Iterable[Path]
    ) -> MakefileVars:
        """프로그램 이름과 리소스 bin/ 스크립트마다 심볼릭 링크 명령을 만듭니다."""
        additional_scripts: list[str] = []
        for resource_dir in resource_dirs:
            scripts_dir = resource_dir / "bin"
            if scripts_dir.is_dir():
                additional_scripts.extend(sorted(p.name for p in scripts_dir.iterdir()))

        names = [entry.script_name for entry in entries] + additional_scripts
        return MakefileVars(
            prog_name=self.project_name,
            prog_symlink="\n".join(link_to_script(name) for name in names),
        )

    def generate(
        self, layout: PackageLayout, resource_dirs: Iterable[Path] = ()
    ) -> list[Path]:  # [JP-D001.8]
        """런처, Makefile, VERSION을 layout에 씁니다.

        Returns:
            생성한 파일 경로 목록

        Raises:
            LayoutError: 파일 쓰기 실패
            jinja2.TemplateError: 템플릿 렌더링 실패 (그대로 전파)
        """
        entries = launch_entries(self.config)
        generated: list[Path] = []

        logger.info("launch_scripts_generating", programs=len(entries))
        if not entries:
            logger.warning(
                "no_main_class_mapping",
                hint="main 설정에 (프로그램 이름 -> 메인 클래스)를 지정하세요",
            )

        for entry in entries:
            logger.info("main_class", program=entry.name, main_class=entry.main_class)
            script = self.renderer(
                self.config.bash_template, self.launch_vars(entry, layout).to_mapping()
            )
            generated.append(self._write(layout.dist_dir, f"bin/{entry.script_name}", script))

            if self.config.generate_windows_bat:
                bat = self.renderer(
                    self.config.bat_template, self.windows_vars(entry, layout).to_mapping()
                )
                generated.append(
                    self._write(layout.dist_dir, f"bin/{entry.script_name}.bat", bat)
                )

        makefile = self.renderer(
            self.config.make_template,
            self.makefile_vars(entries, resource_dirs).to_mapping(),
        )
        generated.append(self._write(layout.dist_dir, "Makefile", makefile))
        generated.append(self._write(layout.dist_dir, "VERSION", f"version:={self.version}\n"))
        return generated

    def _write(self, dist_dir: Path, relative: str, content: str) -> Path:
        path = dist_dir / relative
        logger.info("file_generated", path=relative)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            msg = f"파일 쓰기 실패: {path}: {e}"
            raise LayoutError(msg) from e
        return path
