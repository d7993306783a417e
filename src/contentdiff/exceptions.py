#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the contentdiff library.

Exception Hierarchy
-------------------
- ContentDiffError (base exception)

  - ValidationError (parameter/option validation)
    - MalformedContentError (content tree cannot be diffed)
    - ConfigurationError (config file problems)

  - SourceFileError (source files that cannot be read)

  - CompilationError (fatal diagnostic sets)
    - EvaluationError (document compiler failed)
    - LayoutError (typesetting failed or delayed errors survived)

  - RenderingError (output generation failures)

"""

from __future__ import annotations

from typing import Any, Iterable

from contentdiff.diagnostics import Diagnostic, deduplicate


class ContentDiffError(Exception):
    """Base exception class for all contentdiff-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(ContentDiffError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class MalformedContentError(ValidationError):
    """Exception raised when a content tree violates a structural invariant.

    The only such invariant today is that a sequence never starts with a
    Space, because a leading space has no preceding word to attach to.

    Parameters
    ----------
    message : str
        Description of the problem
    index : int, optional
        Position of the offending child in its sequence

    """

    def __init__(self, message: str, index: int | None = None):
        """Initialize the malformed content error."""
        super().__init__(message, parameter_name="content", parameter_value=index)
        self.index = index


class ConfigurationError(ValidationError):
    """Exception raised when a configuration file cannot be used.

    Parameters
    ----------
    message : str
        Description of the problem
    config_path : str, optional
        Path of the offending configuration file
    original_error : Exception, optional
        The underlying exception

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error."""
        super().__init__(message, parameter_name="config", parameter_value=config_path, original_error=original_error)
        self.config_path = config_path


class SourceFileError(ContentDiffError):
    """Exception raised when a source document cannot be read.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the file that caused the error
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the source file error."""
        super().__init__(message, original_error)
        self.file_path = file_path


class CompilationError(ContentDiffError):
    """Base exception for failures reported as a set of diagnostics.

    The diagnostics are deduplicated by (location, message) on construction.

    Parameters
    ----------
    diagnostics : iterable of Diagnostic
        The fatal diagnostics
    message : str, optional
        Summary message. Defaults to the first diagnostic's message.

    Attributes
    ----------
    diagnostics : list of Diagnostic
        Deduplicated fatal diagnostics

    """

    def __init__(self, diagnostics: Iterable[Diagnostic], message: str | None = None):
        """Initialize the compilation error."""
        self.diagnostics: list[Diagnostic] = deduplicate(diagnostics)
        if message is None:
            if self.diagnostics:
                count = len(self.diagnostics)
                message = str(self.diagnostics[0]) if count == 1 else f"{self.diagnostics[0]} (and {count - 1} more)"
            else:
                message = "compilation failed"
        super().__init__(message)


class EvaluationError(CompilationError):
    """Exception raised when the document compiler cannot evaluate a source."""


class LayoutError(CompilationError):
    """Exception raised when layout fails or delayed errors survive the final pass."""


class RenderingError(ContentDiffError):
    """Exception raised when output generation fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


__all__ = [
    "CompilationError",
    "ConfigurationError",
    "ContentDiffError",
    "EvaluationError",
    "LayoutError",
    "MalformedContentError",
    "RenderingError",
    "SourceFileError",
    "ValidationError",
]
