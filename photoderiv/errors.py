"""
Exceptions raised by the derivative pipeline.

Pipeline-fatal errors abort the whole run. AssetError and its subclasses
abort only the asset they were raised for.
"""

from pathlib import Path
from typing import Union


class PipelineError(Exception):
    """Base class for all pipeline errors."""


class DirectoryUnreadable(PipelineError):
    """A directory in the input tree could not be listed."""

    def __init__(self, path: Union[str, Path], reason: str = ''):
        self.path = Path(path)
        self.reason = reason
        message = f"Cannot list directory {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class OutputRootUncreatable(PipelineError):
    """The output root could not be created."""

    def __init__(self, path: Union[str, Path], reason: str = ''):
        self.path = Path(path)
        self.reason = reason
        message = f"Cannot create output root {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class AssetError(PipelineError):
    """
    Processing of a single source asset failed.

    Attributes:
        path: The file that was being read or written
        stage: Pipeline stage that failed (e.g. 'decode', 'persist')
        reason: Underlying error message
    """

    stage = 'process'

    def __init__(self, path: Union[str, Path], reason: str = '', stage: str = ''):
        self.path = Path(path)
        self.reason = reason
        if stage:
            self.stage = stage
        super().__init__(f"[{self.stage}] {self.path}: {reason or 'failed'}")


class DecodeError(AssetError):
    """The source image could not be decoded."""

    stage = 'decode'


class EncodeError(AssetError):
    """A corrected original or derivative could not be written."""

    stage = 'persist'


class UnsupportedFormat(EncodeError):
    """No encoder is known for the target extension."""


class OutputCollision(AssetError):
    """Another source asset already owns this asset's output paths."""

    stage = 'plan'

    def __init__(self, path: Union[str, Path], owner: Union[str, Path], target: Union[str, Path]):
        self.owner = Path(owner)
        self.target = Path(target)
        super().__init__(path, f"output {self.target} is already written from {self.owner}")
