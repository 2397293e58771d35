from __future__ import annotations


# ScratchRunError is the base for every fatal condition; only the CLI maps it to an exit code.
class ScratchRunError(Exception):
    pass


class MissingArgument(ScratchRunError):
    # No project file was given on the command line.
    pass


class UnreadableFile(ScratchRunError):
    # Raised with the underlying OS error text so it can be reported verbatim.
    pass


class InvalidProject(ScratchRunError):
    # The decoder or the execution engine rejected the project content.
    pass


class BlockedExtension(ScratchRunError):
    # Headless runs cannot load dynamic capabilities (music, pen, video sensing, ...).
    def __init__(self, extension_id: str) -> None:
        super().__init__(f"Can not use extension {extension_id}")
        self.extension_id = extension_id


class InvalidQuestion(ScratchRunError):
    # An ask arrived without question text; this is a contract violation of the engine.
    pass


class InputUnderflow(ScratchRunError):
    # Eager delivery buffered the whole input and an ask still has nothing to read.
    pass
