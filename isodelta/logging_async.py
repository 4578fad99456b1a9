import asyncio, logging, sys

LOG_FORMAT = "[%(asctime)s] %(levelname)s> %(message)s"
LOG_DATEFMT = "%H:%M:%S"
LOGGER_NAME = "isodelta"


class AsyncQueueHandler(logging.Handler):
    """Hand formatted records to an asyncio queue without blocking the request."""

    def __init__(self, queue: asyncio.Queue):
        super().__init__()
        self.queue = queue

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.queue.put_nowait((record.levelno, self.format(record)))
        except Exception:
            self.handleError(record)


async def log_worker(
    queue: asyncio.Queue, stop_event: asyncio.Event, level=logging.INFO, stream=None
) -> None:
    """Drain ``queue`` to ``stream`` (stdout by default) until stopped and empty."""
    sink = logging.StreamHandler(stream or sys.stdout)
    sink.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATEFMT))
    sink.setLevel(level)

    while not stop_event.is_set() or not queue.empty():
        try:
            lvl, msg = await asyncio.wait_for(queue.get(), timeout=0.5)
        except asyncio.TimeoutError:
            continue
        try:
            if lvl >= sink.level:
                sink.handle(
                    logging.LogRecord(f"{LOGGER_NAME}.server", lvl, "", 0, msg, None, None)
                )
        except Exception as e:
            sys.stderr.write(f"[log_worker error] {e}\n")
        finally:
            queue.task_done()

    sink.flush()


def get_logger(queue: asyncio.Queue, name: str = LOGGER_NAME) -> logging.Logger:
    logger = logging.getLogger(name)
    for existing in logger.handlers:
        if isinstance(existing, AsyncQueueHandler):
            existing.queue = queue
            break
    else:
        handler = AsyncQueueHandler(queue)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
    return logger


def parse_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name}")
    return level
