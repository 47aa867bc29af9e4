"""Integration tests for the Flask endpoints."""

import io
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from app import app


@pytest.fixture
def client():
    """Create a test client for the Flask app."""
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


def upload(text, filename='trace.txt'):
    return (io.BytesIO(text.encode('utf-8')), filename)


class TestAnalyzeApi:
    """Tests for POST /api/analyze."""
    
    def test_analyze_trace(self, client, sample_trace_text):
        response = client.post('/api/analyze', data={'file': upload(sample_trace_text)},
                               content_type='multipart/form-data')
        
        assert response.status_code == 200
        data = response.get_json()
        assert data['summary']['total_scripts'] == 2
        assert data['namespace_percentages'] == {'deno_node': 100.0}
    
    def test_analyze_with_event_logs(self, client, sample_trace_text, event_log_texts):
        response = client.post('/api/analyze', data={
            'file': upload(sample_trace_text),
            'events': [upload(text, f"events.{run}.txt") for run, text in enumerate(event_log_texts)],
        }, content_type='multipart/form-data')
        
        assert response.status_code == 200
        assert response.get_json()['summary']['total_script_time_ms'] == 4.0
    
    def test_incomplete_event_logs(self, client, sample_trace_text):
        response = client.post('/api/analyze', data={
            'file': upload(sample_trace_text),
            'events': [
                upload("script,deserialize,1,1.0\nscript,deserialize,2,2.0", 'events.0.txt'),
                upload("script,deserialize,1,1.0", 'events.1.txt'),
            ],
        }, content_type='multipart/form-data')
        
        assert response.status_code == 422
        assert 'run 1' in response.get_json()['error']
    
    def test_no_file(self, client):
        response = client.post('/api/analyze', data={}, content_type='multipart/form-data')
        assert response.status_code == 400
    
    def test_invalid_extension(self, client):
        response = client.post('/api/analyze', data={'file': upload('0 A', 'trace.json')},
                               content_type='multipart/form-data')
        assert response.status_code == 400
    
    def test_invalid_depth_encoding(self, client):
        response = client.post('/api/analyze', data={'file': upload('0 A'), 'depth_encoding': 'octal'},
                               content_type='multipart/form-data')
        assert response.status_code == 400


class TestWebPages:
    """Tests for the HTML pages."""
    
    def test_index(self, client):
        response = client.get('/')
        assert response.status_code == 200
        assert b'Snapshot Trace Analyzer' in response.data
    
    def test_analyze_renders_report(self, client, sample_trace_text):
        response = client.post('/analyze', data={'file': upload(sample_trace_text)},
                               content_type='multipart/form-data')
        
        assert response.status_code == 200
        assert b'node:fs' in response.data
        assert b'<title>trace.txt</title>' in response.data
    
    def test_analyze_error_shows_form(self, client):
        response = client.post('/analyze', data={}, content_type='multipart/form-data')
        assert b'No file provided' in response.data
