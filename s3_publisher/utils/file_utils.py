"""ファイル操作関連のユーティリティ"""
import os
import posixpath
from typing import Iterable, List, Set, Tuple

import bracex
from wcmatch import fnmatch as wcfnmatch
from wcmatch import glob as wcglob

from ..errors import PatternError

# `*` / `**` / `{a,b}` を有効化、ドットファイルも対象
GLOB_FLAGS = wcglob.GLOBSTAR | wcglob.BRACE | wcglob.DOTGLOB

_MAGIC_CHARS = frozenset("*?[{")


def expand(pattern: str) -> List[str]:
    """globパターンを展開して重複なしのパス一覧を返す

    Raises:
        PatternError: 構文が不正、またはディレクトリの走査に失敗した場合
    """
    if not pattern or not pattern.strip():
        raise PatternError(pattern, "pattern cannot be empty")

    check_syntax(pattern)
    # wcmatch は読めないディレクトリを黙って飛ばすため先に走査して確認
    for alternative in bracex.expand(pattern):
        _check_traversal(pattern, alternative)

    try:
        matches = wcglob.glob(pattern, flags=GLOB_FLAGS)
    except (OSError, ValueError) as e:
        raise PatternError(pattern, str(e)) from e

    # 展開順を保ったまま重複を除去
    return list(dict.fromkeys(matches))


def resolve(include: str, excludes: Iterable[str] = ()) -> List[str]:
    """includeパターンの展開結果から、excludeパターンに一致するパスを除く

    比較はパス文字列の完全一致で行う（正規化はしない）。
    そのため `./a.txt` と `a.txt` は別のパスとして扱われる。

    Raises:
        PatternError: パターンが不正、または走査に失敗した場合
    """
    matches = expand(include)

    excluded: Set[str] = set()
    for pattern in excludes:
        excluded.update(expand(pattern))

    if not excluded:
        return matches
    return [match for match in matches if match not in excluded]


def derive_key(local_path: str, strip_prefix: str = "", target: str = "",
               target_prefix: str = "") -> str:
    """ローカルパスからS3キーを決定

    target が指定されている場合は全ファイルがそのキーになる（単一ファイルの
    リネーム用途。複数ファイルにマッチすると同じキーに上書きされる）。
    """
    if target:
        return target.lstrip("/")

    key = local_path
    if strip_prefix and key.startswith(strip_prefix):
        key = key[len(strip_prefix):]
    key = key.replace(os.sep, "/")

    if target_prefix:
        key = posixpath.join(target_prefix.replace(os.sep, "/"), key.lstrip("/"))
    return key.lstrip("/")


def check_syntax(pattern: str) -> None:
    """`[...]` と `{...}` の対応をチェック"""
    depth = 0
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "\\":
            i += 2
            continue

        if ch == "[":
            j = i + 1
            if j < n and pattern[j] in "!^":
                j += 1
            # 先頭の `]` は文字クラスの一部
            if j < n and pattern[j] == "]":
                j += 1
            while j < n and pattern[j] != "]":
                j += 2 if pattern[j] == "\\" else 1
            if j >= n:
                raise PatternError(pattern, f"unterminated character class at position {i}")
            i = j + 1
            continue

        if ch == "{":
            depth += 1
        elif ch == "}":
            if depth == 0:
                raise PatternError(pattern, f"unmatched '}}' at position {i}")
            depth -= 1
        i += 1

    if depth:
        raise PatternError(pattern, "unterminated brace expression")


def _split_root(pattern: str) -> Tuple[str, List[str]]:
    """ワイルドカードを含まない先頭ディレクトリと、残りのパス要素に分ける"""
    parts = pattern.split("/")
    literal: List[str] = []
    for part in parts[:-1]:
        if any(ch in _MAGIC_CHARS for ch in part):
            break
        literal.append(part)
    rest = parts[len(literal):]
    if not literal:
        return "", rest
    return "/".join(literal) or "/", rest


def _check_traversal(pattern: str, alternative: str) -> None:
    """パターンが辿るディレクトリを一覧できるか確認"""
    root, parts = _split_root(alternative)
    top = root or os.curdir
    if not os.path.isdir(top):
        return

    def onerror(error: OSError) -> None:
        raise PatternError(pattern, f"cannot read directory {error.filename}: {error.strerror}")

    for dirpath, dirnames, _ in os.walk(top, onerror=onerror):
        rel = os.path.relpath(dirpath, top)
        depth = 0 if rel == os.curdir else rel.count(os.sep) + 1

        # `**` 以降は全ディレクトリが対象
        if "**" in parts[:depth + 1]:
            continue
        if depth + 1 >= len(parts):
            dirnames[:] = []
            continue
        component = parts[depth]
        dirnames[:] = [
            name for name in dirnames
            if wcfnmatch.fnmatch(name, component, flags=wcfnmatch.DOTMATCH)
        ]
