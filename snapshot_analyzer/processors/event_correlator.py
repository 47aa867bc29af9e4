"""
Correlation of script deserialize timestamps across repeated runs.
"""

from typing import Dict, List

from ..core.errors import MissingCorrelationData
from ..extractors import ScriptEventExtractor


class EventCorrelator:
    """Averages per-script deserialize timestamps over N event logs."""
    
    @staticmethod
    def parse_event_log(text: str) -> Dict[int, float]:
        """
        Parse one run's event log.
        
        Args:
            text: Full event log text
            
        Returns:
            Dictionary mapping script id -> timestamp
        """
        return ScriptEventExtractor.extract_deserialize_timestamps(text.split('\n'))
    
    @staticmethod
    def correlate(event_maps: List[Dict[int, float]]) -> Dict[int, float]:
        """
        Average each baseline script id's timestamp across all runs.
        
        The id set of run 0 is the baseline. Every other run must carry
        every baseline id; averaging over fewer runs would bias the mean.
        
        Args:
            event_maps: One id -> timestamp map per run, run 0 first
            
        Returns:
            Dictionary mapping script id -> mean timestamp
            
        Raises:
            MissingCorrelationData: If a baseline id is absent from any run
        """
        if not event_maps:
            return {}
        
        run_count = len(event_maps)
        averaged = {}
        for script_id, timestamp in event_maps[0].items():
            total = timestamp
            for run in range(1, run_count):
                if script_id not in event_maps[run]:
                    raise MissingCorrelationData(script_id, run)
                total += event_maps[run][script_id]
            averaged[script_id] = total / run_count
        
        return averaged
