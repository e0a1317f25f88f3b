"""
[JP-B000] jarpack.deps
의존성 모델, 빌드 매니페스트, 의존성 수집기
"""
