"""
[JP-D000] jarpack.launcher
런처 스크립트 / Makefile 생성기
"""
