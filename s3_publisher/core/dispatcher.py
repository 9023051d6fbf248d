"""並列アップロード実行"""
import os
import queue
import threading
import time
from typing import Callable, List, Optional, Sequence, Tuple

from ..utils.logger import LoggerManager
from .uploader import UploadExecutor, UploadResult

# ワーカーへの終了通知
_DONE = object()

ResultCallback = Callable[[UploadResult], None]


def default_parallelism() -> int:
    """論理CPU数（取得できない場合は1）"""
    return os.cpu_count() or 1


class Dispatcher:
    """固定数のワーカーで共有キューからジョブを取り出してアップロード"""

    def __init__(self, executor: UploadExecutor, parallel: int = 0):
        self.executor = executor
        self.parallel = parallel if parallel > 0 else default_parallelism()
        self.logger = LoggerManager.get_logger()

    def run(self, jobs: Sequence[str],
            on_result: Optional[ResultCallback] = None) -> List[UploadResult]:
        """全ジョブを処理し、ジョブ順に並んだ結果を返す

        失敗したジョブがあっても他のジョブは継続する。
        全ワーカーの終了を待ってから戻る。
        """
        if not jobs:
            return []
        results: List[Optional[UploadResult]] = [None] * len(jobs)

        worker_count = min(self.parallel, len(jobs))
        self.logger.info(
            f"Starting parallel upload of {len(jobs)} files with {worker_count} workers"
        )

        # 容量をワーカー数に制限（ワーカーが詰まっていれば投入側が待つ）
        tasks: "queue.Queue" = queue.Queue(maxsize=worker_count)
        workers = [
            threading.Thread(
                target=self._worker,
                args=(tasks, results, on_result),
                name=f"s3-publisher-{i}",
            )
            for i in range(worker_count)
        ]
        for worker in workers:
            worker.start()

        for index, path in enumerate(jobs):
            tasks.put((index, path))
        for _ in workers:
            tasks.put(_DONE)

        for worker in workers:
            worker.join()

        return [result for result in results if result is not None]

    def _worker(self, tasks: "queue.Queue", results: List[Optional[UploadResult]],
                on_result: Optional[ResultCallback]) -> None:
        while True:
            item = tasks.get()
            if item is _DONE:
                return

            index, path = item
            start = time.monotonic()
            try:
                result = self.executor.upload_file(path)
            except Exception as e:
                self.logger.error(f"Upload task exception for {path}: {e}")
                result = UploadResult(path, success=False, error=e)
            result.elapsed = time.monotonic() - start

            # 各ワーカーは自分のジョブの枠にだけ書き込む
            results[index] = result

            if on_result is not None:
                try:
                    on_result(result)
                except Exception as e:
                    self.logger.error(f"Result callback failed for {path}: {e}")

    @staticmethod
    def summarize(results: Sequence[UploadResult]) -> Tuple[int, int]:
        """(成功数, 失敗数) を返す"""
        successful = sum(1 for result in results if result.success)
        return successful, len(results) - successful
