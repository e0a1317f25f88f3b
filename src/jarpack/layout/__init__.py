"""
[JP-C000] jarpack.layout
배포 디렉토리 레이아웃 빌더
"""
