"""
Request logging with timing and memory metrics
"""
import time
import logging
from flask import request, g
import psutil

logger = logging.getLogger(__name__)


class RequestLogger:
    """Per-request timing and process memory delta"""

    @staticmethod
    def before_request():
        g.start_time = time.time()
        g.request_id = f"{int(time.time() * 1000000)}"
        try:
            g.initial_memory = psutil.Process().memory_info().rss
        except psutil.Error as e:
            logger.debug(f"Could not collect initial process metrics: {e}")
            g.initial_memory = 0
        logger.debug(f"Request: {request.method} {request.url}")

    @staticmethod
    def after_request(response):
        if not hasattr(g, 'start_time'):
            return response

        duration_ms = (time.time() - g.start_time) * 1000
        memory_diff = 0
        if getattr(g, 'initial_memory', 0) > 0:
            try:
                memory_diff = psutil.Process().memory_info().rss - g.initial_memory
            except psutil.Error as e:
                logger.debug(f"Could not collect final process metrics: {e}")

        log_level = logging.INFO
        if response.status_code >= 500:
            log_level = logging.ERROR
        elif response.status_code >= 400:
            log_level = logging.WARNING

        logger.log(
            log_level,
            f"REQUEST_LOG: id={g.request_id} {request.method} {request.path} "
            f"status={response.status_code} duration_ms={duration_ms:.2f} "
            f"memory_delta_mb={max(memory_diff, 0) / (1024 * 1024):.3f}"
        )
        return response
