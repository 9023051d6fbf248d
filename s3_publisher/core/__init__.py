"""S3 Publisher コアモジュール"""
from .s3_client import S3ClientManager
from .uploader import UploadExecutor, UploadResult
from .dispatcher import Dispatcher
from .task_runner import TaskRunner

__all__ = [
    'S3ClientManager',
    'UploadExecutor',
    'UploadResult',
    'Dispatcher',
    'TaskRunner'
]
