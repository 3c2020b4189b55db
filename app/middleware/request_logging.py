# app/middleware/request_logging.py

import time
from fastapi import Request

from app.utils.logger import get_logger

logger = get_logger("access")

PROCESS_TIME_HEADER = "X-Process-Time-Ms"


async def request_logging_middleware(request: Request, call_next):
    started = time.perf_counter()

    response = await call_next(request)

    elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
    response.headers[PROCESS_TIME_HEADER] = str(elapsed_ms)

    logger.info(
        "%s %s",
        request.method,
        request.url.path,
        extra={
            "client_addr": request.client.host if request.client else "unknown",
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "process_time_ms": elapsed_ms,
        },
    )

    return response
