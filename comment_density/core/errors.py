"""
Comment Density Errors

Every failure the analysis can surface to its caller derives from
CommentDensityError, so the CLI can report them uniformly.
"""

from __future__ import annotations


class CommentDensityError(Exception):
    """
    Base exception for comment density analysis errors.
    """


class ConfigInvalid(CommentDensityError):
    """
    Raised when the rule configuration is missing, unparsable or empty.
    """


class PathNotFound(CommentDensityError):
    """
    Raised when the directory to analyze does not exist or is not a directory.
    """


class FileReadError(CommentDensityError):
    """
    Raised when a selected file cannot be read during a scan.
    """
