"""
Integration tests for end-to-end snapshot trace analysis.
"""
import json

import pytest

from snapshot_analyzer import SnapshotAnalyzer
from snapshot_analyzer.core.errors import MissingCorrelationData, UnrecognizedNamespace
from snapshot_analyzer.web import prepare_results, render_report


def names(node):
    return [child.name for child in node.children]


class TestAnalyzerScenarios:
    """Small traces with fully known output."""
    
    def test_tree_and_objects_without_scripts(self):
        analyzer = SnapshotAnalyzer()
        stats = analyzer.analyze("-- 10.0 obj1\n0 NodeA\n1 NodeB\n-- 10.5 obj2\n0 NodeC")
        
        root = analyzer.root
        assert names(root) == ['NodeA', 'NodeC']
        assert names(root.children[0]) == ['NodeB']
        assert [o.duration for o in analyzer.context.objects] == [0, 0.5]
        assert [o.node_id for o in analyzer.context.objects] == [1, 3]
        assert stats['total_object_time_ms'] == 0.5
        assert stats['scripts'] == []
    
    def test_dangling_backref_renders(self):
        analyzer = SnapshotAnalyzer()
        analyzer.analyze("0 NewObject [Map]\n1 Backref (@5)")
        
        entry = analyzer.backrefs.get('@5')
        assert entry.defining_node is None
        assert len(entry.referencing_nodes) == 1
        
        results = prepare_results(analyzer)
        backref_label = results['tree']['children'][0]['children'][0]['label']
        assert '(backref @5)' in backref_label
        assert 'href="#backref-@5"' not in backref_label
        assert results['summary']['unresolved_backrefs'] == ['@5']
        render_report(results)
    
    def test_skipped_lines_do_not_consume_ids(self):
        analyzer = SnapshotAnalyzer()
        analyzer.analyze("0 A\nnot-hex B\n0 heap-capacity 12\n3\n0 B")
        
        assert [(n.id, n.name) for n in analyzer.root.children] == [(1, 'A'), (2, 'B')]
        assert analyzer.context.skipped_lines == 2


class TestAnalyzerWithScripts:
    """Traces with script events, with and without separate event logs."""
    
    def test_trace_as_single_run(self, sample_trace_text):
        analyzer = SnapshotAnalyzer()
        stats = analyzer.analyze(sample_trace_text)
        context = analyzer.context
        
        assert len(context.nodes) == 6
        assert [(s.id, s.name, s.node_id) for s in context.scripts] == [
            (1, 'ext:core/01_core.js', 1),
            (2, 'node:fs', 5),
        ]
        assert [s.elapsed_since_last for s in context.scripts] == [0, 4.0]
        assert [(o.script_id, o.node_id) for o in context.objects] == [(2, 3), (3, 5)]
        
        rootarray = context.node(2)
        assert rootarray.ref == '3'
        assert context.backrefs.get('3').referencing_nodes == [context.node(4)]
        
        assert [s.id for s in stats['scripts']] == [2]
        assert stats['total_script_time_ms'] == 4.0
        assert stats['namespace_percentages'] == {'deno_node': 100.0}
        assert [o.raw_payload for o in stats['objects']] == ['0x2 string hello']
    
    def test_averaged_runs(self, sample_trace_text, event_log_texts):
        from snapshot_analyzer.processors import EventCorrelator
        
        event_maps = [EventCorrelator.parse_event_log(text) for text in event_log_texts]
        analyzer = SnapshotAnalyzer(runs=2)
        analyzer.analyze(sample_trace_text, event_maps)
        
        scripts = analyzer.context.scripts
        assert [s.timestamp for s in scripts] == [2.0, 6.0]
        assert scripts[1].elapsed_since_last == 4.0
    
    def test_incomplete_runs_abort(self, sample_trace_text):
        analyzer = SnapshotAnalyzer(runs=2)
        with pytest.raises(MissingCorrelationData):
            analyzer.analyze(sample_trace_text, [{1: 1.0, 2: 2.0}, {1: 1.0}])
    
    def test_unknown_namespace_aborts(self):
        trace = "script,deserialize,1,0\nscript,deserialize,2,10\nscript-details,2,main.js\n0 A"
        with pytest.raises(UnrecognizedNamespace):
            SnapshotAnalyzer().analyze(trace)
    
    def test_indent_encoding(self, indent_trace_text):
        analyzer = SnapshotAnalyzer(depth_encoding='indent')
        analyzer.analyze(indent_trace_text)
        
        first = analyzer.root.children[0]
        assert names(analyzer.root) == ['NewObject', 'NewObject']
        assert names(first) == ['RootArray', 'Backref']
        assert names(first.children[0]) == ['ReadOnlyHeapRef']


class TestFilesAndResults:
    """Reading from disk and preparing output."""
    
    def test_process_files(self, tmp_path, sample_trace_text, event_log_texts):
        trace_file = tmp_path / "trace.txt"
        trace_file.write_text(sample_trace_text)
        events_dir = tmp_path / "events"
        events_dir.mkdir()
        for run, text in enumerate(event_log_texts):
            (events_dir / f"events.{run}.txt").write_text(text)
        
        analyzer = SnapshotAnalyzer(runs=2)
        analyzer.process_files(str(trace_file), events_dir=str(events_dir))
        
        assert [s.timestamp for s in analyzer.context.scripts] == [2.0, 6.0]
    
    def test_missing_event_log(self, tmp_path, sample_trace_text):
        trace_file = tmp_path / "trace.txt"
        trace_file.write_text(sample_trace_text)
        (tmp_path / "events").mkdir()
        
        with pytest.raises(FileNotFoundError):
            SnapshotAnalyzer(runs=1).process_files(str(trace_file), events_dir=str(tmp_path / "events"))
    
    def test_results_are_json_serializable(self, sample_trace_text):
        analyzer = SnapshotAnalyzer()
        analyzer.analyze(sample_trace_text)
        results = prepare_results(analyzer)
        
        decoded = json.loads(json.dumps(results))
        tree = decoded['tree']
        assert tree['id'] == '0'
        assert 'parent' not in tree
        assert tree['children'][0]['id'] == '1'
        assert decoded['scripts'][0]['percent'] == '100.00'
        assert decoded['summary']['total_nodes'] == 5
    
    def test_tree_keeps_node_fields(self):
        analyzer = SnapshotAnalyzer()
        analyzer.analyze("0 NewObject [Map]\n(set obj backref 3)\n1 Backref (3)")
        tree = prepare_results(analyzer)['tree']
        
        definer = tree['children'][0]
        reference = definer['children'][0]
        assert {'id', 'name', 'data', 'depth', 'ref', 'backref', 'label', 'children'} <= set(definer)
        assert 'parent' not in definer
        assert (definer['name'], definer['data'], definer['ref'], definer['backref']) == ('NewObject', '[Map]', '3', None)
        assert (reference['name'], reference['data'], reference['backref']) == ('Backref', '(3)', '3')
        assert reference['id'] == '2'
        assert 'href="#backref-3"' in reference['label']
        assert 'id="backref-3"' in definer['label']
    
    def test_render_report(self, sample_trace_text):
        analyzer = SnapshotAnalyzer()
        analyzer.analyze(sample_trace_text)
        html = render_report(prepare_results(analyzer), title='trace.txt')
        
        assert '<title>trace.txt</title>' in html
        assert 'node:fs' in html
        assert 'href="#5"' in html
