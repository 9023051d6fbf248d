"""設定管理用のデータクラス"""
from dataclasses import dataclass, field
from typing import List, Mapping, Optional
import json
import os

from ..errors import ConfigError


ENCRYPTION_MODES = ("", "AES256", "aws:kms")

CANNED_ACLS = (
    "private",
    "public-read",
    "public-read-write",
    "authenticated-read",
    "aws-exec-read",
    "bucket-owner-read",
    "bucket-owner-full-control",
)

_TRUE_VALUES = ("1", "t", "true")
_FALSE_VALUES = ("0", "f", "false")


@dataclass
class LoggingConfig:
    """ロギング設定"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(threadName)s - %(levelname)s - %(message)s"
    file: Optional[str] = None
    sdk_level: str = "WARNING"  # boto3/botocore/urllib3 のログレベル


@dataclass
class AWSConfig:
    """AWS関連の設定"""
    region: str = "us-east-1"
    endpoint: Optional[str] = None
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    path_style: bool = False

    def __post_init__(self):
        if not self.region:
            self.region = "us-east-1"

    @property
    def has_static_credentials(self) -> bool:
        return bool(self.access_key and self.secret_key)


@dataclass(frozen=True)
class UploadConfig:
    """アップロード設定（実行中は読み取り専用）"""
    bucket: str
    target: str = ""  # 全ファイル共通のキー
    target_prefix: str = ""  # キーのディレクトリプレフィックス
    strip_prefix: str = ""
    acl: str = "private"
    cache_control: str = ""
    encryption: str = ""
    dry_run: bool = False
    checksum: bool = False
    parallel: int = 0  # 0の場合はCPU数

    def __post_init__(self):
        """アップロード設定のバリデーション"""
        if not self.bucket or not self.bucket.strip():
            raise ConfigError("bucket cannot be empty")

        if self.encryption not in ENCRYPTION_MODES:
            raise ConfigError(
                f"Invalid encryption: {self.encryption}. "
                "Must be empty, 'AES256' or 'aws:kms'"
            )

        if self.acl not in CANNED_ACLS:
            raise ConfigError(
                f"Invalid acl: {self.acl}. Must be one of {', '.join(CANNED_ACLS)}"
            )

        if not isinstance(self.parallel, int) or self.parallel < 0:
            raise ConfigError(f"Invalid parallel: {self.parallel}. Must be >= 0")

        # 先頭のスラッシュは除去（バケット相対にする）
        if self.target.startswith("/"):
            object.__setattr__(self, "target", self.target.lstrip("/"))


@dataclass
class Config:
    """メイン設定クラス"""
    logging: LoggingConfig
    aws: AWSConfig
    upload: UploadConfig
    source: str
    exclude: List[str] = field(default_factory=list)

    def __post_init__(self):
        if not self.source:
            raise ConfigError("source cannot be empty")

    @classmethod
    def from_file(cls, config_path: str) -> 'Config':
        """設定ファイルから読み込み"""
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file {config_path} not found.")

        try:
            with open(config_path, "r", encoding="utf-8") as file:
                data = json.load(file)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Error decoding JSON from {config_path}: {e}")

        try:
            # 各セクションをパース
            logging_config = LoggingConfig(**data.get("logging", {}))
            aws_config = AWSConfig(**data.get("aws", {}))
            upload_config = UploadConfig(**data.get("upload", {}))
        except TypeError as e:
            raise ConfigError(f"Error loading configuration: {e}")

        return cls(
            logging=logging_config,
            aws=aws_config,
            upload=upload_config,
            source=data.get("source", ""),
            exclude=list(data.get("exclude", [])),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None,
                 prefix: str = "PLUGIN_") -> 'Config':
        """CIプラグイン形式の環境変数から読み込み"""
        if environ is None:
            environ = os.environ

        def get(name: str, default: str = "") -> str:
            return environ.get(prefix + name, default).strip()

        logging_config = LoggingConfig(level=get("LOG_LEVEL", "INFO") or "INFO")
        aws_config = AWSConfig(
            region=get("REGION", "us-east-1"),
            endpoint=get("ENDPOINT") or None,
            access_key=get("ACCESS_KEY") or None,
            secret_key=get("SECRET_KEY") or None,
            path_style=_parse_bool(prefix + "PATH_STYLE", get("PATH_STYLE")),
        )
        upload_config = UploadConfig(
            bucket=get("BUCKET"),
            target=get("TARGET"),
            target_prefix=get("TARGET_PREFIX"),
            strip_prefix=get("STRIP_PREFIX"),
            acl=get("ACCESS", "private") or "private",
            cache_control=get("CACHE_CONTROL"),
            encryption=get("ENCRYPTION"),
            dry_run=_parse_bool(prefix + "DRY_RUN", get("DRY_RUN")),
            checksum=_parse_bool(prefix + "MD5SHA", get("MD5SHA")),
            parallel=_parse_int(prefix + "PARALLEL", get("PARALLEL")),
        )
        exclude = [p.strip() for p in get("EXCLUDE").split(",") if p.strip()]

        return cls(
            logging=logging_config,
            aws=aws_config,
            upload=upload_config,
            source=get("SOURCE"),
            exclude=exclude,
        )


def _parse_bool(name: str, value: str) -> bool:
    if not value:
        return False
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for {name}: {value!r}")


def _parse_int(name: str, value: str) -> int:
    if not value:
        return 0
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"Invalid integer for {name}: {value!r}")
