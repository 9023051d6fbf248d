"""S3アップロード実行クラス"""
import os
import stat
from typing import Any, Dict, Optional
from dataclasses import dataclass

from botocore.exceptions import BotoCoreError, ClientError
from ..errors import FileReadError, JobError, StatError, UploadError
from ..models.config import UploadConfig
from ..utils.checksum import content_md5, digest
from ..utils.content_type import classify
from ..utils.file_utils import derive_key
from ..utils.logger import LoggerManager


@dataclass
class UploadResult:
    """アップロード結果"""
    path: str
    success: bool
    key: Optional[str] = None
    skipped: bool = False  # ディレクトリ
    elapsed: float = 0.0
    error: Optional[Exception] = None

    @property
    def status(self) -> str:
        if not self.success:
            return "failed"
        return "skipped" if self.skipped else "success"


class UploadExecutor:
    """ファイルアップロードの実行"""

    def __init__(self, s3_client, config: UploadConfig):
        self.s3_client = s3_client
        self.config = config
        self.logger = LoggerManager.get_logger()

    def key_for(self, path: str) -> str:
        """ローカルパスに対応するS3キー"""
        return derive_key(
            path,
            strip_prefix=self.config.strip_prefix,
            target=self.config.target,
            target_prefix=self.config.target_prefix,
        )

    def upload_file(self, path: str) -> UploadResult:
        """単一ファイルをアップロード（ジョブ単位の失敗は結果として返す）"""
        try:
            return self._execute_upload(path)
        except JobError as e:
            self.logger.error(str(e))
            return UploadResult(path, success=False, error=e)

    def _execute_upload(self, path: str) -> UploadResult:
        """実際のアップロード処理"""
        try:
            st = os.stat(path)
        except OSError as e:
            raise StatError(path, e)

        # ディレクトリはオブジェクトとしてアップロードしない
        if stat.S_ISDIR(st.st_mode):
            self.logger.debug(f"Skipping directory {path}")
            return UploadResult(path, success=True, skipped=True)

        key = self.key_for(path)
        content_type = classify(path)

        if self.config.dry_run:
            self.logger.info(
                f"[DRY RUN]: Would upload {path} to {self.config.bucket}/{key} ({content_type})"
            )
            return UploadResult(path, success=True, key=key)

        try:
            self._send(path, key, content_type)
        except JobError as e:
            # キー決定後の失敗は結果にキーを残す
            self.logger.error(str(e))
            return UploadResult(path, success=False, key=key, error=e)

        self.logger.debug(f"Uploaded {path} to {self.config.bucket}/{key}")
        return UploadResult(path, success=True, key=key)

    def _send(self, path: str, key: str, content_type: str) -> None:
        """ファイルを開いて put_object を呼ぶ（ファイルは必ず閉じる）"""
        try:
            f = open(path, "rb")
        except OSError as e:
            raise FileReadError(path, e)

        with f:
            params = self._build_params(path, key, content_type)
            params["Body"] = f
            try:
                self.s3_client.put_object(**params)
            except (ClientError, BotoCoreError) as e:
                raise UploadError(path, self.config.bucket, key, e)
            except Exception as e:
                self.logger.warning(f"Unexpected error from storage client: {e!r}")
                raise UploadError(path, self.config.bucket, key, e)

    def _build_params(self, path: str, key: str, content_type: str) -> Dict[str, Any]:
        """put_object のパラメータ（Body以外）"""
        params: Dict[str, Any] = {
            "Bucket": self.config.bucket,
            "Key": key,
            "ACL": self.config.acl,
            "ContentType": content_type,
        }

        if self.config.encryption:
            params["ServerSideEncryption"] = self.config.encryption

        if self.config.cache_control:
            params["CacheControl"] = self.config.cache_control

        if self.config.checksum:
            checksum = digest(path)
            params["ContentMD5"] = content_md5(checksum)
            self.logger.info(f"{path} md5sum {checksum}")

        return params
