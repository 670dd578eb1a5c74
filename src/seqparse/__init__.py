"""
seqparse: discover numbered file sequences and convert between filename
patterns (`#`, `%04d`, `%d`, `%v`, `%V`) and the files they designate.
"""

from .core.errors import CompileError, DirectoryUnavailableError, SequenceParsingError, UnrecognizedVariableError
from .core.types import MatchResult, SequenceFromPattern
from .processing.content import FileNameContent
from .processing.listing import compile_and_list_files, flatten
from .processing.matcher import match_filename
from .processing.pattern import CompiledPattern, compile_tokens, render_file_name
from .processing.sequence import SequenceFromFiles, SequenceState, discover_sequence_from_seed_file

__version__ = "0.1.0"

__all__ = [
    "CompileError",
    "CompiledPattern",
    "DirectoryUnavailableError",
    "FileNameContent",
    "MatchResult",
    "SequenceFromFiles",
    "SequenceFromPattern",
    "SequenceParsingError",
    "SequenceState",
    "UnrecognizedVariableError",
    "compile_and_list_files",
    "compile_tokens",
    "discover_sequence_from_seed_file",
    "flatten",
    "match_filename",
    "render_file_name",
]
