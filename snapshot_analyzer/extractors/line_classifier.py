"""
Classification of raw snapshot trace lines.
"""

import re
from dataclasses import dataclass
from typing import Optional

from ..core.errors import MalformedTrace
from ..core.types import DEPTH_ENCODINGS

IGNORE = 'ignore'
OBJECT_BOUNDARY = 'object_boundary'
SCRIPT_EVENT = 'script_event'
BACKREF_DEFINITION = 'backref_definition'
TREE_NODE = 'tree_node'

BACKREF_DEFINITION_PREFIX = '(set obj backref'
HEX_DEPTH = re.compile(r'[0-9a-fA-F]+')

# Name prefixes of events that carry no object-graph information
IGNORED_EVENT_PREFIXES = (
    'v8-version',
    'v8-platform',
    'new',
    'heap-capacity',
    'heap-available',
    'function',
    'compilation-cache',
    'delete',
)


@dataclass(frozen=True)
class ClassifiedLine:
    """A trace line tagged with its kind and whatever fields that kind carries."""
    kind: str
    text: str = ''
    depth: Optional[int] = None
    name: Optional[str] = None
    data: str = ''
    backref_name: Optional[str] = None


class LineClassifier:
    """Tags each trace line as ignorable, object boundary, script event, back-reference definition or tree node."""
    
    def __init__(self, depth_encoding: str = 'hex'):
        """
        Args:
            depth_encoding: 'hex' for a leading hexadecimal depth token,
                            'indent' for the leading whitespace column
        """
        if depth_encoding not in DEPTH_ENCODINGS:
            raise ValueError(f"Unknown depth encoding {depth_encoding!r}")
        self.depth_encoding = depth_encoding
    
    def classify(self, raw_line: str, line_number: Optional[int] = None) -> ClassifiedLine:
        """
        Classify one line of trace text.
        
        Prefix checks run before tree-node parsing: a boundary or script line
        parsed as a node would corrupt the depth cursor for its siblings.
        
        Args:
            raw_line: Untrimmed line (trailing newline allowed)
            line_number: 1-based position, only used in error messages
            
        Returns:
            ClassifiedLine
            
        Raises:
            MalformedTrace: If a tree-node line has no valid depth or no name
        """
        line = raw_line.rstrip('\r\n')
        text = line.strip()
        
        if not text or line.startswith('['):
            return ClassifiedLine(IGNORE, text)
        if line.startswith('--'):
            return ClassifiedLine(OBJECT_BOUNDARY, text)
        if line.startswith('script'):
            return ClassifiedLine(SCRIPT_EVENT, text)
        if text.startswith(BACKREF_DEFINITION_PREFIX):
            return ClassifiedLine(BACKREF_DEFINITION, text,
                                  backref_name=self.extract_backref_definition(text, line_number))
        
        return self._classify_tree_node(line, text, line_number)
    
    def _classify_tree_node(self, line: str, text: str, line_number: Optional[int]) -> ClassifiedLine:
        tokens = text.split()

        # Top-level noise events carry no depth token
        if tokens[0].startswith(IGNORED_EVENT_PREFIXES):
            return ClassifiedLine(IGNORE, text)

        if self.depth_encoding == 'hex':
            depth_token = tokens.pop(0)
            if not HEX_DEPTH.fullmatch(depth_token):
                raise MalformedTrace(f"depth token {depth_token!r} is not hexadecimal", line, line_number)
            depth = int(depth_token, 16)
        else:
            depth = len(line) - len(line.lstrip())
        
        if not tokens:
            raise MalformedTrace("missing node name", line, line_number)
        
        name, data = tokens[0], ' '.join(tokens[1:])
        
        if name.startswith(IGNORED_EVENT_PREFIXES):
            return ClassifiedLine(IGNORE, text)
        
        if name.startswith('-'):
            name = name[1:]
        
        return ClassifiedLine(TREE_NODE, text, depth=depth, name=name, data=data)
    
    @staticmethod
    def extract_backref_definition(text: str, line_number: Optional[int] = None) -> str:
        """
        Extract the back-reference name from a '(set obj backref <name>)' line.
        
        Args:
            text: Trimmed line
            line_number: 1-based position, only used in error messages
            
        Returns:
            The back-reference name
        """
        tokens = text.split(' ')
        if len(tokens) < 4:
            raise MalformedTrace("back-reference definition without a name", text, line_number)
        name = tokens[3][:-1].strip() if tokens[3].endswith(')') else tokens[3].strip()
        if not name:
            raise MalformedTrace("back-reference definition without a name", text, line_number)
        return name
    
    @staticmethod
    def extract_backref_target(data: str) -> Optional[str]:
        """
        Extract the referenced name from a Backref node payload such as '(5)'.
        
        Returns:
            The name, or None if the payload is empty
        """
        tokens = data.split()
        if not tokens:
            return None
        return tokens[0].strip()[1:-1].strip() or None
