"""
RunLib - Run configuration and orchestration

This module ties the other libraries together: run configuration and state,
image ordering and pairing, logging setup and the run driver.
"""

from SBS_Libs.RunLib.run_config import RunConfig, RunContext
from SBS_Libs.RunLib.pairer import Pairer, order_images
from SBS_Libs.RunLib.runner import RunSummary, process_images, run
from SBS_Libs.RunLib.logging_setup import configure_logging, default_log_dir

__all__ = [
    "RunConfig",
    "RunContext",
    "Pairer",
    "order_images",
    "RunSummary",
    "process_images",
    "run",
    "configure_logging",
    "default_log_dir",
]
