"""pytest 共通フィクスチャ"""
import threading

import pytest

from s3_publisher.models.config import UploadConfig


class FakeS3Client:
    """put_object の呼び出しを記録するだけのS3クライアント"""

    def __init__(self, fail_keys=(), hook=None):
        self.calls = []
        self.fail_keys = set(fail_keys)
        self.hook = hook
        self.lock = threading.Lock()

    def put_object(self, **kwargs):
        if self.hook is not None:
            self.hook(kwargs)
        body = kwargs["Body"].read()
        call = dict(kwargs, Body=body, closed_after=kwargs["Body"])
        with self.lock:
            self.calls.append(call)
        if kwargs["Key"] in self.fail_keys:
            raise RuntimeError(f"quota exceeded for {kwargs['Key']}")
        return {"ETag": '"fake"'}

    @property
    def keys(self):
        return sorted(call["Key"] for call in self.calls)


@pytest.fixture
def fake_client():
    return FakeS3Client()


@pytest.fixture
def upload_config():
    return UploadConfig(bucket="release-bucket", parallel=2)


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """a.txt, b.txt, sub/c.txt, sub/d.json を持つ作業ディレクトリ"""
    (tmp_path / "a.txt").write_text("alpha")
    (tmp_path / "b.txt").write_text("bravo")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "c.txt").write_text("charlie")
    (tmp_path / "sub" / "d.json").write_text('{"delta": 4}')
    monkeypatch.chdir(tmp_path)
    return tmp_path
