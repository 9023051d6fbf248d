"""S3クライアント管理"""
import boto3
from typing import Optional, Dict, Any
from botocore.config import Config as BotoConfig
from botocore.exceptions import NoCredentialsError
from ..models.config import AWSConfig
from ..utils.logger import LoggerManager


class S3ClientManager:
    """S3クライアントの作成と管理"""

    def __init__(self, aws_config: AWSConfig):
        self.aws_config = aws_config
        self.logger = LoggerManager.get_logger()
        self._client: Optional[Any] = None

    def get_client(self):
        """S3クライアントを取得（必要に応じて作成）"""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def client_kwargs(self) -> Dict[str, Any]:
        """boto3.client に渡す引数を組み立て"""
        kwargs: Dict[str, Any] = {"region_name": self.aws_config.region}

        # MinIO等のS3互換ストレージ向け
        if self.aws_config.endpoint:
            kwargs["endpoint_url"] = self.aws_config.endpoint
            kwargs["use_ssl"] = not self.aws_config.endpoint.startswith("http://")

        if self.aws_config.path_style:
            kwargs["config"] = BotoConfig(s3={"addressing_style": "path"})

        if self.aws_config.has_static_credentials:
            kwargs["aws_access_key_id"] = self.aws_config.access_key
            kwargs["aws_secret_access_key"] = self.aws_config.secret_key

        return kwargs

    def _create_client(self):
        """S3クライアントを作成"""
        try:
            s3_client = boto3.client("s3", **self.client_kwargs())
        except NoCredentialsError:
            self.logger.error("AWS credentials not available.")
            raise
        except Exception as e:
            self.logger.error(f"Error creating S3 client: {e}")
            raise

        if self.aws_config.has_static_credentials:
            self.logger.info("S3 client created with static credentials.")
        else:
            self.logger.info(
                "AWS key and/or secret not provided, falling back to default credentials."
            )
        return s3_client
