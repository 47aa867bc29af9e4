"""
Script event extraction from trace lines and per-run event logs.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional

DESERIALIZE = 'deserialize'
SCRIPT_DETAILS = 'script-details'


@dataclass(frozen=True)
class ScriptEvent:
    """A parsed script sub-event."""
    kind: str
    script_id: int
    timestamp: Optional[float] = None
    name: Optional[str] = None


class ScriptEventExtractor:
    """Parses comma-separated script events."""
    
    @staticmethod
    def parse(line: str) -> Optional[ScriptEvent]:
        """
        Parse a script event line.
        
        Recognized forms:
            script,deserialize,<id>,<timestamp>
            script-details,<id>,<name>
            script,script-details,<id>,<name>
        
        Args:
            line: Trimmed line
            
        Returns:
            ScriptEvent, or None for other script sub-events and unparsable ids
        """
        fields = line.strip().split(',')
        event_name, rest = fields[0], fields[1:]
        
        if event_name == 'script' and rest and rest[0] == SCRIPT_DETAILS:
            event_name, rest = SCRIPT_DETAILS, rest[1:]
        
        if event_name == SCRIPT_DETAILS:
            script_id = _parse_int(rest[0] if rest else '')
            if script_id is None:
                return None
            name = ','.join(rest[1:]).strip()
            return ScriptEvent(SCRIPT_DETAILS, script_id, name=name)
        
        if event_name == 'script' and len(rest) >= 3 and rest[0] == DESERIALIZE:
            script_id = _parse_int(rest[1])
            try:
                timestamp = float(rest[2])
            except ValueError:
                return None
            if script_id is None:
                return None
            return ScriptEvent(DESERIALIZE, script_id, timestamp=timestamp)
        
        return None
    
    @staticmethod
    def extract_deserialize_timestamps(lines: Iterable[str]) -> Dict[int, float]:
        """
        Build the id -> timestamp map of one run.
        
        Only deserialize sub-events are captured; the last occurrence of an id wins.
        
        Args:
            lines: Lines of one event log
            
        Returns:
            Dictionary mapping script id -> timestamp
        """
        timestamps = {}
        for line in lines:
            line = line.strip()
            if not line.startswith('script'):
                continue
            event = ScriptEventExtractor.parse(line)
            if event is not None and event.kind == DESERIALIZE:
                timestamps[event.script_id] = event.timestamp
        return timestamps


def _parse_int(value: str) -> Optional[int]:
    try:
        return int(value.strip(), 10)
    except ValueError:
        return None
