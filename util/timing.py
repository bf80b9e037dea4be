# util/timing.py
import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator


def _fields(kv: Dict[str, Any]) -> str:
    return "".join(f" {k}={v}" for k, v in kv.items())


def _elapsed_ms(t0: float) -> int:
    return int((time.perf_counter() - t0) * 1000)


@contextmanager
def timed(logger: logging.Logger, name: str, **kv: Any) -> Iterator[None]:
    """
    with timed(logger, "tree.list", root="/~bob/"):
        ...

    On success logs "<name>.done ms=<int> key=val ..." at INFO.
    If the block raises (listing deadline, cancelled request) logs
    "<name>.aborted ms=<int> err=<type> key=val ..." at WARNING and re-raises.
    """
    t0 = time.perf_counter()
    try:
        yield
    except BaseException as e:
        logger.warning(
            "%s.aborted ms=%d err=%s%s", name, _elapsed_ms(t0), type(e).__name__, _fields(kv)
        )
        raise
    logger.info("%s.done ms=%d%s", name, _elapsed_ms(t0), _fields(kv))
