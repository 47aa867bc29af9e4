"""
Ranking and grouping of object and script timings.
"""

from typing import Dict, List, Tuple

from ..core.errors import UnrecognizedNamespace
from ..core.types import AggregatedStats, ObjectRecord, ScriptRecord, TraceConfig
from ..formatters.time_formatter import percent_of

UNKNOWN_SCRIPT = 'Unknown'


class TimingAggregator:
    """Ranks objects by duration and scripts by time-to-deserialize."""
    
    def __init__(self, config: TraceConfig):
        """
        Args:
            config: TraceConfig with the object threshold and fallback size
        """
        self.config = config
    
    def rank_objects(self, objects: List[ObjectRecord]) -> Tuple[List[ObjectRecord], float]:
        """
        Sort objects by duration and keep the ones above the threshold.
        
        If nothing exceeds the threshold, the top fallback_top_n objects
        are kept instead of an empty table.
        
        Args:
            objects: Object records in trace order
            
        Returns:
            Tuple of (ranked objects, total object time)
        """
        if not objects:
            objects = [ObjectRecord(timestamp=0.0, raw_payload='No objects', duration=0.0)]
        
        total_time = objects[-1].timestamp - objects[0].timestamp
        ranked = sorted(objects, key=lambda o: o.duration, reverse=True)
        
        filtered = [o for o in ranked if o.duration > self.config.object_time_threshold]
        if not filtered:
            filtered = ranked[:self.config.fallback_top_n]
        
        return filtered, total_time
    
    @staticmethod
    def rank_scripts(scripts: List[ScriptRecord]) -> Tuple[List[ScriptRecord], float]:
        """
        Sort scripts by elapsed time and drop the ones with none.
        
        Zero or negative elapsed times come from scripts sharing an averaged
        timestamp, not from real work.
        
        Args:
            scripts: Script records in trace order
            
        Returns:
            Tuple of (ranked scripts, total script time)
        """
        total_time = scripts[-1].timestamp - scripts[0].timestamp if scripts else 0.0
        ranked = sorted(scripts, key=lambda s: s.elapsed_since_last, reverse=True)
        return [s for s in ranked if s.elapsed_since_last > 0], total_time
    
    @staticmethod
    def namespace_of(name: str) -> str:
        """
        Map a script name to its namespace.
        
        'node:*' scripts belong to 'deno_node'; 'ext:<ns>/...' scripts to '<ns>'.
        
        Raises:
            UnrecognizedNamespace: For any other name
        """
        if name.startswith('node:'):
            return 'deno_node'
        if name.startswith('ext:'):
            return name.split('/')[0][4:]
        raise UnrecognizedNamespace(name)
    
    @staticmethod
    def _named(scripts: List[ScriptRecord]) -> List[ScriptRecord]:
        return [s for s in scripts if s.name is not None and s.name != UNKNOWN_SCRIPT]
    
    def group_by_namespace(self, scripts: List[ScriptRecord], total_time: float) -> Dict[str, float]:
        """
        Sum each namespace's share of total script time, in percent.
        
        Unnamed scripts are left out; any other script must map to a namespace.
        
        Raises:
            UnrecognizedNamespace: If a script name fits no namespace
        """
        percentages: Dict[str, float] = {}
        for script in self._named(scripts):
            namespace = self.namespace_of(script.name)
            percentages[namespace] = percentages.get(namespace, 0.0) + percent_of(
                script.elapsed_since_last, total_time)
        return percentages
    
    def build_chart_rows(self, scripts: List[ScriptRecord]) -> List[list]:
        """
        Build treemap rows: [label, parent, value].
        
        One root row, one row per namespace and one row per named script.
        'ext:' scripts are labelled by their path; a path seen before is
        shortened to its first two segments.
        """
        named = self._named(scripts)
        namespaces = []
        for script in named:
            namespace = self.namespace_of(script.name)
            if namespace not in namespaces:
                namespaces.append(namespace)
        
        rows: List[list] = [['root', None, 0]]
        rows.extend([namespace, 'root', 0] for namespace in namespaces)
        
        seen_paths = set()
        for script in named:
            rows.append([
                self._chart_label(script.name, seen_paths),
                self.namespace_of(script.name),
                script.elapsed_since_last,
            ])
        return rows
    
    @staticmethod
    def _chart_label(name: str, seen_paths: set) -> str:
        if not name.startswith('ext:'):
            return name
        parts = name.split('/')
        path = '/'.join(parts[1:])
        if path not in seen_paths:
            seen_paths.add(path)
            return path
        return '/'.join(parts[1:3])
    
    def aggregate(self, objects: List[ObjectRecord], scripts: List[ScriptRecord]) -> AggregatedStats:
        """
        Produce all ranked and grouped statistics for a parsed trace.
        
        Raises:
            UnrecognizedNamespace: If a script name fits no namespace
        """
        ranked_objects, total_object_time = self.rank_objects(objects)
        ranked_scripts, total_script_time = self.rank_scripts(scripts)
        
        return {
            'objects': ranked_objects,
            'scripts': ranked_scripts,
            'total_object_time_ms': total_object_time,
            'total_script_time_ms': total_script_time,
            'namespace_percentages': self.group_by_namespace(ranked_scripts, total_script_time),
            'chart_rows': self.build_chart_rows(ranked_scripts),
        }
