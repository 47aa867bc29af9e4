#!/usr/bin/env python3
"""
Flask Web Application for the Snapshot Trace Analyzer
Provides a web UI and a REST API endpoint for analyzing snapshot deserialization traces.
"""

from flask import Flask, render_template, request, jsonify
from werkzeug.utils import secure_filename
import os
import tempfile
from snapshot_analyzer import SnapshotAnalyzer
from snapshot_analyzer.core.errors import SnapshotTraceError
from snapshot_analyzer.web import prepare_results, render_report

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = 500 * 1024 * 1024
app.config['UPLOAD_FOLDER'] = tempfile.gettempdir()

ALLOWED_EXTENSIONS = {'txt', 'log'}


def allowed_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def _save_upload(file, prefix=''):
    filepath = os.path.join(app.config['UPLOAD_FOLDER'], prefix + secure_filename(file.filename))
    file.save(filepath)
    return filepath


def _run_analysis():
    """
    Validate the upload and run the analyzer.
    Form fields:
      - 'file': trace text file
      - 'events': zero or more event logs, run 0 first
      - 'depth_encoding': 'hex'|'indent' (optional, default: 'hex')
    Returns: (analyzer, filename) or raises ValueError for a bad request
    """
    if 'file' not in request.files:
        raise ValueError('No file provided')
    
    file = request.files['file']
    if not file.filename:
        raise ValueError('No file selected')
    if not allowed_file(file.filename):
        raise ValueError('Invalid file type. Only .txt and .log files are allowed.')
    
    event_files = [f for f in request.files.getlist('events') if f.filename]
    for event_file in event_files:
        if not allowed_file(event_file.filename):
            raise ValueError('Invalid event log type. Only .txt and .log files are allowed.')
    
    depth_encoding = request.form.get('depth_encoding', 'hex')
    if depth_encoding not in ('hex', 'indent'):
        raise ValueError('depth_encoding must be "hex" or "indent"')
    
    saved = []
    try:
        trace_path = _save_upload(file)
        saved.append(trace_path)
        event_paths = []
        for run, event_file in enumerate(event_files):
            event_path = _save_upload(event_file, prefix=f"run{run}-")
            saved.append(event_path)
            event_paths.append(event_path)
        
        analyzer = SnapshotAnalyzer(depth_encoding=depth_encoding, runs=len(event_paths))
        analyzer.process_files(trace_path, event_paths=event_paths)
    finally:
        for path in saved:
            os.remove(path)
    
    return analyzer, secure_filename(file.filename)


@app.route('/')
def index():
    """Main page with file upload form."""
    return render_template('index.html')


@app.route('/api/analyze', methods=['POST'])
def analyze_api():
    """
    API endpoint to analyze a trace.
    Accepts: multipart/form-data (see _run_analysis)
    Returns: JSON with analysis results
    """
    try:
        analyzer, _ = _run_analysis()
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    except SnapshotTraceError as e:
        return jsonify({'error': str(e)}), 422
    
    return jsonify(prepare_results(analyzer))


@app.route('/analyze', methods=['POST'])
def analyze_web():
    """
    Web endpoint to analyze a trace.
    Accepts: multipart/form-data (see _run_analysis)
    Returns: HTML report page
    """
    try:
        analyzer, filename = _run_analysis()
    except ValueError as e:
        return render_template('index.html', error=str(e))
    except SnapshotTraceError as e:
        return render_template('index.html', error=f'Error analyzing file: {str(e)}')
    
    return render_report(prepare_results(analyzer), title=filename)


if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=5001)
