"""例外クラス定義"""
from typing import Optional


class PublishError(Exception):
    """s3_publisher の基底例外"""


class ConfigError(PublishError, ValueError):
    """設定値が不正"""


class PatternError(PublishError):
    """globパターンの展開に失敗（実行全体を中止）"""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"invalid pattern {pattern!r}: {reason}")


class JobError(PublishError):
    """個別ジョブの失敗（そのジョブのみ失敗扱い）"""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(message)


class StatError(JobError):
    """マッチ後にファイルのstatが失敗"""

    def __init__(self, path: str, cause: OSError):
        self.cause = cause
        super().__init__(path, f"stat {path} failed: {cause}")


class FileReadError(JobError):
    """ファイルのオープン・読み込みに失敗"""

    def __init__(self, path: str, cause: OSError):
        self.cause = cause
        super().__init__(path, f"reading {path} failed: {cause}")


class UploadError(JobError):
    """ストレージ側でアップロードが拒否された"""

    def __init__(self, path: str, bucket: str, key: str, cause: Optional[Exception] = None):
        self.bucket = bucket
        self.key = key
        self.cause = cause
        super().__init__(
            path, f"could not upload file {path!r} to {bucket + '/' + key!r}, err: {cause}"
        )
