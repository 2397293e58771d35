from .input_source import StreamInputSource, strip_terminator
from .log_sinks import JsonlLogSink, NullLogSink, StderrLogSink
from .output_sink import StreamOutputSink
from .project_archive import ProjectDocument, decode_project, read_project_bytes, reject_extensions

# Public adapter exports are optional but make wiring simpler.
__all__ = [
    "JsonlLogSink",
    "NullLogSink",
    "ProjectDocument",
    "StderrLogSink",
    "StreamInputSource",
    "StreamOutputSink",
    "decode_project",
    "read_project_bytes",
    "reject_extensions",
    "strip_terminator",
]
