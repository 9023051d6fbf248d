"""ファイルのチェックサム計算"""
import base64
import binascii
import hashlib

from ..errors import FileReadError

CHUNK_SIZE = 64 * 1024


def digest(path: str) -> str:
    """ファイル内容のMD5を16進文字列で返す

    ファイル全体をメモリに載せずチャンク単位で読み込む。
    改ざん検知ではなく転送中の破損検知用なので MD5 で十分。

    Raises:
        FileReadError: オープン・読み込みに失敗した場合
    """
    md5_hash = hashlib.md5(usedforsecurity=False)
    try:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
                md5_hash.update(chunk)
    except OSError as e:
        raise FileReadError(path, e)
    return md5_hash.hexdigest()


def content_md5(hex_digest: str) -> str:
    """16進のMD5を Content-MD5 ヘッダー用のbase64に変換"""
    try:
        raw = binascii.unhexlify(hex_digest)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid hex digest: {hex_digest!r}") from e
    return base64.b64encode(raw).decode("ascii")
