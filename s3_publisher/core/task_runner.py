"""アップロードタスクの実行"""
from typing import List, Optional, Tuple

from ..models.config import Config
from ..utils.logger import LoggerManager
from ..utils.file_utils import resolve
from .dispatcher import Dispatcher
from .uploader import UploadExecutor, UploadResult
from .s3_client import S3ClientManager


class TaskRunner:
    """パターン解決からアップロードまでを実行"""

    def __init__(self, config: Config, s3_client=None):
        self.config = config
        self.logger = LoggerManager.get_logger()

        # S3クライアントとアップローダーを初期化
        if s3_client is None:
            s3_client = S3ClientManager(config.aws).get_client()
        self.s3_client = s3_client
        self.executor = UploadExecutor(self.s3_client, config.upload)
        self.dispatcher = Dispatcher(self.executor, config.upload.parallel)
        self.results: List[UploadResult] = []

    def run(self) -> Tuple[int, int]:
        """マッチしたファイルを全てアップロードして (成功数, 失敗数) を返す

        Raises:
            PatternError: パターン解決に失敗した場合（アップロードは行わない）
        """
        upload = self.config.upload
        matches = resolve(self.config.source, self.config.exclude)

        if not matches:
            self.logger.warning(f"No files matched {self.config.source}")
            self.results = []
            return 0, 0

        self.logger.info(
            f"Attempting to upload files, region: {self.config.aws.region}, "
            f"bucket: {upload.bucket}"
        )
        for match in matches:
            self.logger.info("%-48s --> %s", match, self.executor.key_for(match))

        if upload.target and len(matches) > 1:
            self.logger.warning(
                f"target '{upload.target}' is set and {len(matches)} files matched; "
                "every file will be uploaded to the same key"
            )

        self.results = self.dispatcher.run(matches, on_result=self._report)
        successful, failed = Dispatcher.summarize(self.results)

        self.logger.info(f"Upload completed: {successful} successful, {failed} failed")
        return successful, failed

    def _report(self, result: UploadResult) -> None:
        """ジョブ単位の結果をログ出力"""
        key = result.key or "-"
        if result.success:
            self.logger.info(
                "upload %48s --> %s %s %.3fs", result.path, key, result.status, result.elapsed
            )
        else:
            self.logger.error(
                "upload %48s --> %s failed %.3fs %s",
                result.path, key, result.elapsed, result.error,
            )
