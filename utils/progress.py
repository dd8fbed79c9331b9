from typing import Dict, Optional
import logging
import time

import psutil
from tqdm import tqdm


class ProgressMonitor:
    """Tracks timing and memory of the analysis stages"""

    def __init__(self, stages: int, desc: str = "Analysis",
                 logger: Optional[logging.Logger] = None,
                 show_bar: bool = True):
        """Initialize monitor with the number of stages and a description"""
        self.logger = logger or logging.getLogger('progress')
        self.pbar = tqdm(total=stages, desc=desc, disable=not show_bar)
        self.description = desc
        self.start_time = time.time()
        self.last_checkpoint = self.start_time
        self.checkpoints: Dict[str, Dict[str, float]] = {}

    def checkpoint(self, name: str):
        """Record timing for a completed stage and advance the bar"""
        now = time.time()
        self.checkpoints[name] = {
            'duration': now - self.last_checkpoint,
            'memory': psutil.Process().memory_info().rss / 1024 / 1024  # MB
        }
        self.last_checkpoint = now
        self.pbar.update(1)
        self.logger.info(
            f"{self.description}: {name} done in "
            f"{self.checkpoints[name]['duration']:.2f}s"
        )

    def report(self) -> str:
        """Generate checkpoint report"""
        total_time = time.time() - self.start_time
        report = ["Performance Report:", "-----------------"]

        for name, stats in self.checkpoints.items():
            report.append(f"{name}:")
            report.append(f"  Duration: {stats['duration']:.2f} seconds")
            report.append(f"  Memory: {stats['memory']:.2f} MB")

        report.append("-----------------")
        report.append(f"Total Time: {total_time:.2f} seconds")
        return "\n".join(report)

    def close(self):
        """Close progress bar and log final statistics"""
        self.pbar.close()
        self.logger.info(self.report())
