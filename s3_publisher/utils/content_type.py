"""Content-Type判定"""
import mimetypes
import os

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# システムの mime.types を読まない組み込みテーブルのみ
_MIME_TYPES = mimetypes.MimeTypes()


def classify(path: str) -> str:
    """拡張子からMIMEタイプを返す（不明な場合は application/octet-stream）"""
    ext = os.path.splitext(path)[1]
    if not ext:
        return DEFAULT_CONTENT_TYPE

    for types_map in (_MIME_TYPES.types_map[True], _MIME_TYPES.types_map[False]):
        content_type = types_map.get(ext) or types_map.get(ext.lower())
        if content_type:
            return content_type
    return DEFAULT_CONTENT_TYPE
