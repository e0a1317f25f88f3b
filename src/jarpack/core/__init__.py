"""
[JP-A000] jarpack.core
설정, 예외, 공통 타입
"""
