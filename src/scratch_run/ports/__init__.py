from .engine import ExecutionEngine, Primitive, SayHandler
from .input_source import InputSource
from .log_sink import LogSink
from .output_sink import OutputSink

# Public port exports keep wiring explicit at composition time.
__all__ = [
    "ExecutionEngine",
    "InputSource",
    "LogSink",
    "OutputSink",
    "Primitive",
    "SayHandler",
]
