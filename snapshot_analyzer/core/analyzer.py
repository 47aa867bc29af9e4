"""
Main snapshot trace analyzer orchestrator.
"""

from typing import Dict, List, Optional

from .context import ParseContext
from .errors import MalformedTrace
from .types import AggregatedStats, TraceConfig, TraceNode
from ..extractors import LineClassifier, ScriptEventExtractor
from ..extractors.event_extractor import DESERIALIZE, SCRIPT_DETAILS
from ..extractors.line_classifier import (
    BACKREF_DEFINITION,
    OBJECT_BOUNDARY,
    SCRIPT_EVENT,
    TREE_NODE,
)
from ..processors import (
    EventCorrelator,
    HierarchyBuilder,
    ScriptTimelineBuilder,
    ObjectTimelineBuilder,
    TimingAggregator,
    TraceFileProcessor,
)
from ..formatters import format_time


class SnapshotAnalyzer:
    """Main orchestrator for snapshot trace analysis."""
    
    def __init__(
        self,
        depth_encoding: str = 'hex',
        runs: int = 0,
        object_time_threshold: float = 0.02,
        fallback_top_n: int = 10,
        verbose: bool = False
    ):
        """
        Initialize the SnapshotAnalyzer.
        
        Args:
            depth_encoding: 'hex' or 'indent', see TraceConfig
            runs: Number of event logs to average script timestamps over
            object_time_threshold: Minimum object duration (ms) for the top objects table
            fallback_top_n: Objects kept when none pass the threshold
            verbose: If True, print each script as its name is resolved
        """
        self.config = TraceConfig(
            depth_encoding=depth_encoding,
            runs=runs,
            object_time_threshold=object_time_threshold,
            fallback_top_n=fallback_top_n
        )
        self.verbose = verbose
        
        self.classifier = LineClassifier(depth_encoding)
        self.file_processor = TraceFileProcessor()
        self.aggregator = TimingAggregator(self.config)
        
        self.context: Optional[ParseContext] = None
        self.stats: Optional[AggregatedStats] = None
    
    @property
    def root(self) -> TraceNode:
        return self.context.root
    
    @property
    def backrefs(self):
        return self.context.backrefs
    
    def process_files(
        self,
        trace_path: str,
        events_dir: Optional[str] = None,
        event_paths: Optional[List[str]] = None
    ) -> AggregatedStats:
        """
        Analyze a trace file together with its per-run event logs.
        
        Args:
            trace_path: Path to the trace text file
            events_dir: Directory holding events.<i>.txt for i < config.runs
            event_paths: Explicit event log paths, run 0 first (overrides events_dir)
            
        Returns:
            Aggregated statistics
        """
        if event_paths is None:
            event_paths = (self.file_processor.event_log_paths(events_dir, self.config.runs)
                           if events_dir and self.config.runs else [])
        
        event_maps = self.file_processor.read_event_logs(event_paths)
        trace_text = self.file_processor.read_trace(trace_path)
        return self.analyze(trace_text, event_maps)
    
    def analyze(self, trace_text: str, event_maps: Optional[List[Dict[int, float]]] = None) -> AggregatedStats:
        """
        Reconstruct the object tree and timelines, then aggregate them.
        
        Without event logs the trace's own deserialize events act as the
        single run.
        
        Args:
            trace_text: Complete trace text
            event_maps: One id -> timestamp map per run, run 0 first
            
        Returns:
            Aggregated statistics
            
        Raises:
            MissingCorrelationData: If the runs do not cover the same scripts
            UnrecognizedNamespace: If a script name fits no namespace
        """
        lines = trace_text.split('\n')
        
        # Step 1: Correlate script timestamps across runs
        if not event_maps:
            event_maps = [ScriptEventExtractor.extract_deserialize_timestamps(lines)]
        averaged = EventCorrelator.correlate(event_maps)
        
        # Step 2: Single pass over the trace
        self.context = ParseContext(averaged)
        self._parse_lines(lines)
        
        # Step 3: Rank and group
        self.stats = self.aggregator.aggregate(self.context.objects, self.context.scripts)
        
        self._report_summary(len(event_maps))
        return self.stats
    
    def _parse_lines(self, lines: List[str]) -> None:
        context = self.context
        hierarchy_builder = HierarchyBuilder(context)
        script_timeline = ScriptTimelineBuilder(context, echo=self.verbose)
        object_timeline = ObjectTimelineBuilder(context)
        
        for line_number, raw_line in enumerate(lines, 1):
            try:
                line = self.classifier.classify(raw_line, line_number)
            except MalformedTrace:
                context.skipped_lines += 1
                continue
            
            if line.kind == TREE_NODE:
                hierarchy_builder.add_node(line.depth, line.name, line.data)
            elif line.kind == OBJECT_BOUNDARY:
                if object_timeline.on_boundary(line.text) is None:
                    context.skipped_lines += 1
            elif line.kind == SCRIPT_EVENT:
                event = ScriptEventExtractor.parse(line.text)
                if event is None:
                    continue
                if event.kind == DESERIALIZE:
                    script_timeline.on_deserialize(event)
                elif event.kind == SCRIPT_DETAILS:
                    script_timeline.on_details(event)
            elif line.kind == BACKREF_DEFINITION:
                hierarchy_builder.define_backref(line.backref_name)
    
    def _report_summary(self, run_count: int) -> None:
        context = self.context
        print(f"\nAveraged script timestamps over {run_count} run(s)")
        print(f"Found {len(context.nodes) - 1} tree nodes ({context.skipped_lines} lines skipped)")
        print(f"Found {len(context.objects)} objects, {len(context.scripts)} scripts")
        print(f"Found {len(context.backrefs.entries)} back-references "
              f"({len(context.backrefs.unresolved())} unresolved)")
        print(f"Total object time: {format_time(self.stats['total_object_time_ms'])}, "
              f"total script time: {format_time(self.stats['total_script_time_ms'])}")
