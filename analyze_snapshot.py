#!/usr/bin/env python3
"""
Snapshot Trace Analyzer - Command Line Interface
"""

import json
import sys
from snapshot_analyzer import SnapshotAnalyzer
from snapshot_analyzer.core.errors import SnapshotTraceError
from snapshot_analyzer.web import prepare_results, render_report


def main():
    import argparse
    parser = argparse.ArgumentParser(
        description='Rebuild the object tree of a snapshot deserialization trace and report per-script timing.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python analyze_snapshot.py trace.txt
  python analyze_snapshot.py trace.txt -e events -n 100
  python analyze_snapshot.py trace.txt --depth-encoding indent
  python analyze_snapshot.py trace.txt -e events -n 10 --json -o trace.json
        """
    )
    parser.add_argument('input_file', help='Path to the trace text file')
    parser.add_argument('-o', '--output', dest='output_file', default=None,
                       help='Output file (default: trace.html, or trace.json with --json)')
    parser.add_argument('-e', '--events-dir', default=None,
                       help='Directory containing events.<i>.txt logs, one per run')
    parser.add_argument('-n', '--runs', type=int, default=0,
                       help='Number of event logs to average over (default: 0, use the trace itself)')
    parser.add_argument('--depth-encoding', choices=['hex', 'indent'], default='hex',
                       help='How tree-node lines encode their depth (default: hex)')
    parser.add_argument('--json', action='store_true', help='Write results as JSON instead of HTML')
    parser.add_argument('-v', '--verbose', action='store_true', help='Print each script as it is resolved')
    args = parser.parse_args()
    
    if args.runs and not args.events_dir:
        parser.error('--runs requires --events-dir')
    if args.events_dir and not args.runs:
        parser.error('--events-dir requires --runs')
    
    output_file = args.output_file or ('trace.json' if args.json else 'trace.html')
    
    try:
        analyzer = SnapshotAnalyzer(
            depth_encoding=args.depth_encoding,
            runs=args.runs,
            verbose=args.verbose
        )
        print(f"\nConfiguration:")
        print(f"  Input file: {args.input_file}")
        print(f"  Events dir: {args.events_dir or '-'}")
        print(f"  Runs: {args.runs}")
        print(f"  Depth encoding: {args.depth_encoding}\n")
        analyzer.process_files(args.input_file, events_dir=args.events_dir)
        
        results = prepare_results(analyzer)
        with open(output_file, 'w', encoding='utf-8') as f:
            if args.json:
                json.dump(results, f)
            else:
                f.write(render_report(results))
        print(f"\n✓ Report generated: {output_file}")
    except FileNotFoundError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except (SnapshotTraceError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
