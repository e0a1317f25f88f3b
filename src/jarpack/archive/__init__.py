"""
[JP-E000] jarpack.archive
tar.gz 아카이버
"""
