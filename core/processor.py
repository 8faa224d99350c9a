#!/usr/bin/env python3
"""
Workflow Processor Module
Runs the controller's coroutines from Streamlit's synchronous script thread.
"""

import asyncio
import concurrent.futures
from typing import Any, Awaitable, Callable, Optional

from streamlit.runtime.scriptrunner import add_script_run_ctx, get_script_run_ctx

from utils.helpers import safe_log

DEFAULT_TIMEOUT_SECONDS = 600


class WorkflowProcessor:

    def __init__(self, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        self.timeout = timeout

    def run(self, make_coroutine: Callable[[], Awaitable[Any]], task_name: str = "Workflow") -> Any:
        """
        Run one coroutine to completion on a fresh event loop in a worker thread.
        The worker inherits the script-run context so listeners can update widgets.
        """
        ctx = get_script_run_ctx()

        def _attach_ctx():
            if ctx is not None:
                add_script_run_ctx(ctx=ctx)

        # The caller never waits on the worker beyond the timeout
        executor = concurrent.futures.ThreadPoolExecutor(max_workers=1, initializer=_attach_ctx)
        try:
            future = executor.submit(lambda: asyncio.run(make_coroutine()))
            return future.result(timeout=self.timeout)
        except concurrent.futures.TimeoutError:
            safe_log(f"Processor: {task_name} exceeded {self.timeout}s", "ERROR")
            raise
        finally:
            executor.shutdown(wait=False, cancel_futures=True)


def run_workflow(make_coroutine: Callable[[], Awaitable[Any]],
                 task_name: str = "Workflow",
                 timeout: Optional[float] = None) -> Any:
    processor = WorkflowProcessor(timeout or DEFAULT_TIMEOUT_SECONDS)
    return processor.run(make_coroutine, task_name)
