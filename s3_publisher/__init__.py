"""S3 Publisher パッケージ"""
from typing import List, Tuple
from .models.config import Config, UploadConfig
from .utils.logger import LoggerManager
from .core.task_runner import TaskRunner
from .core.uploader import UploadResult
from .errors import PublishError, PatternError


class S3Publisher:
    """globで選んだファイルをS3へ並列アップロードするメインクラス"""

    def __init__(self, config: Config, s3_client=None):
        self.config = config

        # ロガーをセットアップ
        self.logger = LoggerManager.setup(self.config.logging)
        self.logger.info("S3 Publisher initialized")

        # タスクランナーを作成
        self.task_runner = TaskRunner(self.config, s3_client=s3_client)

    @classmethod
    def from_file(cls, config_path: str = "config.json") -> 'S3Publisher':
        return cls(Config.from_file(config_path))

    def run(self) -> Tuple[int, int]:
        """アップロードを実行"""
        self.logger.info("Starting S3 upload process...")
        return self.task_runner.run()

    @property
    def results(self) -> List[UploadResult]:
        return self.task_runner.results


__all__ = [
    'S3Publisher',
    'Config',
    'UploadConfig',
    'UploadResult',
    'PublishError',
    'PatternError',
]
