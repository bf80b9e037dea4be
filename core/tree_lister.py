# core/tree_lister.py
import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Sequence
from core.entities import DirectoryEntry, FileRecord

logger = logging.getLogger(__name__)

ListDirectory = Callable[[str], Awaitable[Sequence[DirectoryEntry]]]

DEFAULT_MAX_DEPTH = 32
DEFAULT_CONCURRENCY = 8


async def list_recursive(
    namespace_root: str,
    list_directory: ListDirectory,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> List[FileRecord]:
    """
    Flatten the tree under `namespace_root` into leaf-file records whose
    `object_name` is relative to the root.

    Flow:
    - list one directory per backend call (the store has no recursive mode);
    - sibling subdirectories are walked concurrently, at most `concurrency`
      listings in flight;
    - a listing that fails yields nothing for that subtree, the walk goes on;
    - directories more than `max_depth` levels below the root are not listed.

    Order of the result is not stable; callers sort when they need to.
    Cancelling the caller cancels every in-flight listing.
    """
    root = namespace_root if namespace_root.endswith("/") else namespace_root + "/"
    gate = asyncio.Semaphore(max(1, concurrency))

    async def _list(path: str) -> Optional[Sequence[DirectoryEntry]]:
        async with gate:
            try:
                return await list_directory(path)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.warning(
                    "tree.list.failed path=%s err=%s", path, type(e).__name__
                )
                return None

    async def _walk(path: str, depth: int) -> List[FileRecord]:
        entries = await _list(path)
        if not entries:
            return []

        prefix = path[len(root):]
        records: List[FileRecord] = []
        subdirs: List[str] = []
        for entry in entries:
            if not entry.name:
                continue
            if entry.is_directory:
                subdirs.append(f"{path}{entry.name}/")
            else:
                records.append(
                    FileRecord(
                        object_name=prefix + entry.name,
                        length=entry.length,
                        last_changed=entry.last_changed,
                    )
                )

        if subdirs and depth >= max_depth:
            logger.warning(
                "tree.depth.capped path=%s depth=%d skipped=%d",
                path,
                depth,
                len(subdirs),
            )
            return records

        if subdirs:
            nested = await asyncio.gather(*(_walk(d, depth + 1) for d in subdirs))
            for chunk in nested:
                records.extend(chunk)
        return records

    return await _walk(root, 0)
