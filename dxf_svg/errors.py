"""
Errors Module

Exceptions raised by the file-based entry point. The in-memory conversion
never raises for well-formed entities.
"""

from typing import Optional


class DxfSvgError(Exception):
    """Base class for all dxf_svg errors"""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class FileReadError(DxfSvgError, OSError):
    """The DXF file could not be opened or read"""


class ParseError(DxfSvgError, ValueError):
    """ezdxf could not interpret the file contents"""
