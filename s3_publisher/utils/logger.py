"""ロギング設定ユーティリティ"""
import logging
import os
from typing import Optional, List
from ..models.config import LoggingConfig


LOGGER_NAME = "s3_publisher"

# ワーカーごとのリクエストログが大量に出るSDK側のロガー
SDK_LOGGERS = ("boto3", "botocore", "s3transfer", "urllib3")


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


class LoggerManager:
    """ロガーの設定と管理

    ワーカースレッドは `s3-publisher-N` という名前で動くため、
    デフォルトのフォーマットにスレッド名を含めている。
    """

    _logger: Optional[logging.Logger] = None

    @classmethod
    def setup(cls, config: LoggingConfig) -> logging.Logger:
        """ロガーをセットアップ（2回目以降は既存のロガーを返す）"""
        if cls._logger is not None:
            return cls._logger

        formatter = logging.Formatter(config.format, datefmt="%Y-%m-%d %H:%M:%S")
        handlers: List[logging.Handler] = [logging.StreamHandler()]

        if config.file:
            log_dir = os.path.dirname(config.file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            handlers.append(logging.FileHandler(config.file, encoding="utf-8"))

        for handler in handlers:
            handler.setFormatter(formatter)

        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(_level(config.level))
        logger.handlers = handlers

        # DEBUG指定時以外はSDKのログを抑える
        sdk_level = logging.DEBUG if logger.level == logging.DEBUG else _level(config.sdk_level)
        for name in SDK_LOGGERS:
            logging.getLogger(name).setLevel(sdk_level)

        cls._logger = logger
        return logger

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """ロガーを取得（未設定ならハンドラーなしのパッケージロガー）"""
        if cls._logger is None:
            return logging.getLogger(LOGGER_NAME)
        return cls._logger

    @classmethod
    def reset(cls) -> None:
        """設定済みロガーを破棄"""
        if cls._logger is not None:
            for handler in cls._logger.handlers:
                handler.close()
            cls._logger.handlers = []
        cls._logger = None
