"""
Script and object timelines built alongside the object tree.
"""

import math
from typing import TYPE_CHECKING, Optional

from ..core.errors import MissingCorrelationData
from ..core.types import ObjectRecord, ScriptRecord
from ..extractors import ScriptEvent
from ..formatters.time_formatter import format_time

if TYPE_CHECKING:
    from ..core.context import ParseContext


class ScriptTimelineBuilder:
    """Turns script events into ScriptRecords timed by the averaged event map."""
    
    def __init__(self, context: "ParseContext", echo: bool = False):
        """
        Args:
            context: ParseContext holding the averaged timestamps and script list
            echo: If True, print each script once its name is resolved
        """
        self.context = context
        self.echo = echo
    
    def on_deserialize(self, event: ScriptEvent) -> ScriptRecord:
        """
        Append a ScriptRecord for a deserialize event.
        
        Timestamps are in the event log's unit and are scaled down by 1000
        for the report. Elapsed time is measured from the previous script's
        averaged timestamp; the first script has 0.
        
        Raises:
            MissingCorrelationData: If the script id has no averaged timestamp
        """
        averaged = self.context.averaged_timestamps
        if event.script_id not in averaged:
            raise MissingCorrelationData(event.script_id, 0)
        
        current = averaged[event.script_id]
        scripts = self.context.scripts
        elapsed = (current - averaged[scripts[-1].id]) / 1000 if scripts else 0.0
        
        record = ScriptRecord(id=event.script_id, timestamp=current / 1000, elapsed_since_last=elapsed)
        scripts.append(record)
        self.context.scripts_by_id.setdefault(record.id, record)
        
        pending = self.context.pending_details.pop(record.id, None)
        if pending is not None:
            self._resolve(record, *pending)
        
        return record
    
    def on_details(self, event: ScriptEvent) -> Optional[ScriptRecord]:
        """
        Name a script and bind it to the subtree about to be parsed.
        
        Details may precede their deserialize event; they are then held
        until that event arrives.
        
        Returns:
            The named record, or None if it is not known yet
        """
        name = event.name or 'Unknown'
        node_id = self.context.next_node_id
        record = self.context.scripts_by_id.get(event.script_id)
        if record is None:
            self.context.pending_details[event.script_id] = (name, node_id)
            return None
        self._resolve(record, name, node_id)
        return record
    
    def _resolve(self, record: ScriptRecord, name: str, node_id: int) -> None:
        record.name = name
        record.node_id = node_id
        if self.echo:
            print(f"+ {name} ({format_time(record.elapsed_since_last)})")


class ObjectTimelineBuilder:
    """Turns object-boundary markers into ObjectRecords."""
    
    def __init__(self, context: "ParseContext"):
        self.context = context
    
    @staticmethod
    def parse_boundary(text: str):
        """
        Split '-- <timestamp> <payload>' into its parts.
        
        Returns:
            Tuple of (timestamp, payload), or None if the timestamp is not a finite number
        """
        parts = text.split(' ')
        if len(parts) < 2:
            return None
        try:
            timestamp = float(parts[1])
        except ValueError:
            return None
        if not math.isfinite(timestamp):
            return None
        return timestamp, ' '.join(parts[2:])
    
    def on_boundary(self, text: str) -> Optional[ObjectRecord]:
        """
        Append an ObjectRecord for a boundary marker.
        
        Duration is the delta from the previous boundary (0 for the first).
        The record points at the next node to be parsed, and at the script
        about to load: the boundary sits between the last completed script
        and the next one.
        
        Returns:
            The new record, or None if the marker has no usable timestamp
        """
        parsed = self.parse_boundary(text)
        if parsed is None:
            return None
        timestamp, payload = parsed
        
        objects = self.context.objects
        scripts = self.context.scripts
        record = ObjectRecord(
            timestamp=timestamp,
            raw_payload=payload,
            duration=timestamp - objects[-1].timestamp if objects else 0.0,
            node_id=self.context.next_node_id,
            script_id=scripts[-1].id + 1 if scripts else -1,
        )
        objects.append(record)
        return record
