"""
Reading of the trace file and the per-run event logs.
"""

import os
from multiprocessing import Pool
from pathlib import Path
from typing import Dict, List, Optional

from .event_correlator import EventCorrelator


def _read_event_log(file_path: str) -> Dict[int, float]:
    """
    Read and parse one run's event log. Designed to run in a worker process.
    
    Args:
        file_path: Path to the event log
        
    Returns:
        Dictionary mapping script id -> timestamp
    """
    with open(file_path, 'r', encoding='utf-8') as f:
        return EventCorrelator.parse_event_log(f.read())


class TraceFileProcessor:
    """Reads snapshot traces and event logs from disk."""
    
    def __init__(self, num_workers: Optional[int] = None):
        """
        Args:
            num_workers: Number of worker processes for event logs (default: CPU count)
        """
        self.num_workers = num_workers or os.cpu_count() or 4
    
    @staticmethod
    def read_trace(file_path: str) -> str:
        """
        Read the whole trace file.
        
        Args:
            file_path: Path to the trace text file
            
        Returns:
            Trace text
        """
        print(f"Processing {file_path}...")
        with open(file_path, 'r', encoding='utf-8') as f:
            text = f.read()
        print(f"Completed reading file: {text.count(chr(10)) + 1} lines.")
        return text
    
    @staticmethod
    def event_log_paths(events_dir: str, runs: int) -> List[str]:
        """
        Paths of events.<i>.txt for every run in events_dir.
        
        Raises:
            FileNotFoundError: If a run's log is missing
        """
        paths = []
        for run in range(runs):
            path = Path(events_dir) / f"events.{run}.txt"
            if not path.is_file():
                raise FileNotFoundError(f"Event log for run {run} not found: {path}")
            paths.append(str(path))
        return paths
    
    def read_event_logs(self, file_paths: List[str]) -> List[Dict[int, float]]:
        """
        Read and parse every event log, in parallel when there is more than one.
        
        Logs are independent and read-only; results keep the order of
        file_paths so that run 0 stays the baseline.
        
        Args:
            file_paths: One path per run, run 0 first
            
        Returns:
            List of id -> timestamp maps, one per run
        """
        if not file_paths:
            return []
        
        print(f"Reading {len(file_paths)} event logs...")
        
        if len(file_paths) == 1 or self.num_workers <= 1:
            return [_read_event_log(path) for path in file_paths]
        
        with Pool(processes=min(self.num_workers, len(file_paths))) as pool:
            return pool.map(_read_event_log, file_paths)
