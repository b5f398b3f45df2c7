"""Logging system for the knapsack solvers.

This module provides structured logging for tracking solver runs,
including runtime, table fill statistics, and the reconstructed selection.
"""

import logging
import json
import time
from pathlib import Path
from datetime import datetime
from typing import Dict, Any, Optional

DEFAULT_LOG_DIR = "logs"


class SolverLogger:
    """Logger for the DP knapsack solvers with performance metrics.

    Tracks:
    - Standard log messages (debug, info, warning, error)
    - Table statistics (rows filled, cells written)
    - Items chosen during reconstruction
    - Instance characteristics
    """

    def __init__(self, log_dir: str = DEFAULT_LOG_DIR, instance_name: str = "default"):
        """Initialize the logger.

        Args:
            log_dir: Directory for log files
            instance_name: Name of the problem instance being solved
        """
        self.instance_name = instance_name
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.run_id = f"{instance_name}_{self.timestamp}"

        self.metrics = {
            "instance_name": instance_name,
            "timestamp": self.timestamp,
            "start_time": None,
            "end_time": None,
            "total_runtime": None,
            "rows_filled": 0,
            "cells_written": 0,
            "items_selected": 0,
            "selections": [],  # (index, remaining capacity) per reconstruction step
        }

        self._setup_file_logger()
        self._setup_metrics_logger()

        self.logger.info(f"Initialized logger for instance: {instance_name}")
        self.logger.info(f"Run ID: {self.run_id}")

    def _setup_file_logger(self):
        """Setup standard file logger for text messages."""
        log_file = self.log_dir / f"{self.run_id}.log"

        self.logger = logging.getLogger(f"knapsack_{self.run_id}")
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False

        # Remove existing handlers to avoid duplicates
        for handler in list(self.logger.handlers):
            handler.close()
        self.logger.handlers.clear()

        file_handler = logging.FileHandler(log_file, mode='w')
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_formatter)
        self.logger.addHandler(file_handler)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_formatter = logging.Formatter('%(levelname)s - %(message)s')
        console_handler.setFormatter(console_formatter)
        self.logger.addHandler(console_handler)

    def _setup_metrics_logger(self):
        """Setup metrics file for structured performance data."""
        self.metrics_file = self.log_dir / f"{self.run_id}_metrics.json"

    def start_run(self, problem_data: Optional[Dict[str, Any]] = None):
        """Mark the start of a solver run.

        Args:
            problem_data: Dictionary with problem characteristics
                         (trait, n_items, capacity, weights, values)
        """
        self.metrics["start_time"] = time.time()
        if problem_data:
            self.metrics["problem_data"] = problem_data
        self.logger.info("=" * 60)
        self.logger.info("Starting knapsack solver")
        if problem_data:
            self.logger.info(f"Problem: {problem_data}")
        self.logger.info("=" * 60)

    def end_run(self, final_result: Optional[Dict[str, Any]] = None):
        """Mark the end of a solver run and save metrics.

        Args:
            final_result: Dictionary with final solution info
        """
        self.metrics["end_time"] = time.time()
        start = self.metrics["start_time"] or self.metrics["end_time"]
        self.metrics["total_runtime"] = self.metrics["end_time"] - start

        if final_result:
            self.metrics["final_result"] = final_result

        self._save_metrics()

        self.logger.info("=" * 60)
        self.logger.info("Knapsack solver completed")
        self.logger.info(f"Total runtime: {self.metrics['total_runtime']:.3f} seconds")
        self.logger.info(f"Rows filled: {self.metrics['rows_filled']}")
        self.logger.info(f"Cells written: {self.metrics['cells_written']}")
        self.logger.info(f"Items selected: {self.metrics['items_selected']}")
        self.logger.info("=" * 60)

    def log_row_filled(self, row: int, cells: int):
        """Log finishing one pass of the forward DP.

        Args:
            row: Item index (0/1) or capacity (unbounded) just filled
            cells: Number of table cells written during that pass
        """
        self.metrics["rows_filled"] += 1
        self.metrics["cells_written"] += cells
        self.logger.debug(f"Row {row} filled: {cells} cells")

    def log_item_selected(self, index: int, item, remaining: int):
        """Log one step of the backward reconstruction.

        Args:
            index: Position of the item in the input sequence
            item: The item put into the knapsack
            remaining: Capacity left after packing it
        """
        self.metrics["items_selected"] += 1
        self.metrics["selections"].append({"index": index, "remaining": remaining})
        self.logger.debug(f"Selected item {index} (weight={item.weight}, value={item.value}), "
                          f"remaining capacity {remaining}")

    def _save_metrics(self):
        """Save metrics dictionary to JSON file."""
        with open(self.metrics_file, 'w') as f:
            json.dump(self.metrics, f, indent=2, default=str)

        self.logger.info(f"Metrics saved to: {self.metrics_file}")

    def get_metrics(self) -> Dict[str, Any]:
        """Get current metrics dictionary.

        Returns:
            Dictionary with all tracked metrics
        """
        return self.metrics.copy()

    def close(self):
        """Release the file handles held by this logger."""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)

    def debug(self, msg: str):
        """Log debug message."""
        self.logger.debug(msg)

    def info(self, msg: str):
        """Log info message."""
        self.logger.info(msg)

    def warning(self, msg: str):
        """Log warning message."""
        self.logger.warning(msg)

    def error(self, msg: str):
        """Log error message."""
        self.logger.error(msg)


class NoOpLogger:
    """Drop-in replacement for SolverLogger that records nothing."""

    def start_run(self, problem_data=None):
        pass

    def end_run(self, final_result=None):
        pass

    def log_row_filled(self, row, cells):
        pass

    def log_item_selected(self, index, item, remaining):
        pass

    def get_metrics(self):
        return {}

    def close(self):
        pass

    def debug(self, msg):
        pass

    def info(self, msg):
        pass

    def warning(self, msg):
        pass

    def error(self, msg):
        pass


def create_logger(instance_name: str = "default", log_dir: str = DEFAULT_LOG_DIR) -> SolverLogger:
    """Factory function to create a SolverLogger.

    Args:
        instance_name: Name of the problem instance
        log_dir: Directory for log files

    Returns:
        Configured SolverLogger instance
    """
    return SolverLogger(log_dir=log_dir, instance_name=instance_name)
