"""
Pytest configuration and shared fixtures for snapshot analyzer tests.
"""
import pytest

from snapshot_analyzer.core.context import ParseContext


@pytest.fixture
def sample_trace_text():
    """Hex-depth trace with two scripts, two objects and one back-reference."""
    return "\n".join([
        "[00:00:01.000] snapshot deserialization",
        "script,deserialize,1,1000.0",
        "script-details,1,ext:core/01_core.js",
        "0 NewObject [Map]",
        "1 RootArray (5)",
        "-- 2.0 0x1 map",
        "(set obj backref 3)",
        "0 NewObject [String]",
        "1 Backref (3)",
        "script,deserialize,2,5000.0",
        "script-details,2,node:fs",
        "-- 2.5 0x2 string hello",
        "0 NewObject [Array]",
        "v8-version,11,3",
        "",
    ])


@pytest.fixture
def indent_trace_text():
    """Indentation-depth trace."""
    return "\n".join([
        "NewObject [Map]",
        "  RootArray (5)",
        "    -ReadOnlyHeapRef (7)",
        "  Backref (9)",
        "NewObject [String]",
    ])


@pytest.fixture
def event_log_texts():
    """Two runs of the deserialize event log for sample_trace_text."""
    return [
        "script,deserialize,1,1000.0\nscript,deserialize,2,4000.0\nscript,create,1\n",
        "script,deserialize,1,3000.0\nscript,deserialize,2,8000.0\n",
    ]


@pytest.fixture
def context():
    """Empty parse context with no timestamps."""
    return ParseContext()
