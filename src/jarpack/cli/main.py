"""
[JP-H001] jarpack.cli.main
Typer CLI 엔트리포인트 - jarpack 커맨드라인 인터페이스

version: 1.0.0
created: 2026-10-16
modified: 2026-10-16
dependencies: typer>=0.23.1, rich>=14.3.2
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import structlog
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from jarpack import __version__
from jarpack.core.config import PackConfig, load_config
from jarpack.deps.manifest import DEFAULT_MANIFEST, BuildManifest, load_manifest

logger = structlog.get_logger()

app = typer.Typer(
    name="jarpack",
    help="jarpack - JVM 애플리케이션 배포 패키지 빌더",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)

ManifestOption = Annotated[
    Path,
    typer.Option("--manifest", "-m", help="빌드 매니페스트 (YAML)", envvar="JARPACK_MANIFEST"),
]


def version_callback(value: bool) -> None:  # [JP-H001.1]
    """버전 정보를 출력합니다."""
    if value:
        console.print(f"jarpack v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", "-V", help="버전 정보 출력", callback=version_callback, is_eager=True
        ),
    ] = None,
) -> None:
    """jarpack - lib/bin 레이아웃, 런처 스크립트, tar.gz 아카이브 생성."""


def configure_logging(level: str) -> None:  # [JP-H001.2]
    """structlog 필터링 레벨을 설정합니다."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(numeric))


def _load(manifest_path: Path) -> tuple[BuildManifest, PackConfig]:
    # 매니페스트를 읽기 전에는 환경변수(JARPACK_LOG_LEVEL) 레벨만 적용
    configure_logging(load_config().log_level)
    manifest = load_manifest(manifest_path)
    config = load_config(manifest.pack)
    configure_logging(config.log_level)
    logger.debug(
        "config_loaded", manifest=str(manifest_path), convention=config.jar_name_convention
    )
    return manifest, config


@app.command()  # [JP-H001.3]
def pack(manifest: ManifestOption = Path(DEFAULT_MANIFEST)) -> None:
    """배포 디렉토리(target/pack)를 생성합니다."""
    from jarpack.pipeline import pack as run_pack

    try:
        build, config = _load(manifest)
        layout = run_pack(build, config)
    except Exception as e:
        err_console.print(f"오류: {e}", style="red")
        raise typer.Exit(1) from e

    console.print(
        Panel(
            f"[bold]{layout.dist_dir}[/bold]\n"
            f"lib: {len(layout.classpath_jar_names)} jar\n"
            f"bin: {len(config.main)} 프로그램",
            title="jarpack pack",
            border_style="green",
        )
    )


@app.command()  # [JP-H001.4]
def archive(manifest: ManifestOption = Path(DEFAULT_MANIFEST)) -> None:
    """배포 디렉토리를 만든 뒤 tar.gz 아카이브로 묶습니다."""
    from jarpack.pipeline import pack_archive

    try:
        build, config = _load(manifest)
        archive_file = pack_archive(build, config)
    except Exception as e:
        err_console.print(f"오류: {e}", style="red")
        raise typer.Exit(1) from e

    console.print(f"[green]{archive_file}[/green] 생성 완료")


@app.command()  # [JP-H001.5]
def deps(manifest: ManifestOption = Path(DEFAULT_MANIFEST)) -> None:
    """해석된 runtime 의존성과 lib/ 파일명을 출력합니다."""
    from jarpack.pipeline import resolve_dependencies

    try:
        build, config = _load(manifest)
        resolved = resolve_dependencies(build, config)
    except Exception as e:
        err_console.print(f"오류: {e}", style="red")
        raise typer.Exit(1) from e

    if not resolved:
        console.print("의존성이 없습니다.", style="yellow")
        return

    table = Table(title=f"{build.name} {build.version} 의존성")
    table.add_column("모듈", style="cyan")
    table.add_column(f"jar ({config.jar_name_convention})")
    table.add_column("원본 파일")
    for identity, file in resolved.items():
        table.add_row(str(identity), identity.file_name(config.jar_name_convention), str(file))
    console.print(table)


if __name__ == "__main__":
    app()
