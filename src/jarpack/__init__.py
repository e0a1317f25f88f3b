"""
[JP-0000] jarpack
JVM 애플리케이션 배포 패키지 빌더 - lib/bin 레이아웃 + 런처 스크립트 + tar.gz 아카이브

version: 1.0.0
created: 2026-10-16
modified: 2026-10-16
"""

__version__ = "1.0.0"
