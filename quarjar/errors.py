# errors.py
"""
Custom exception classes with improved error messages for quarjar

All exceptions include:
- Clear error description
- Actionable suggestions
- Relevant context
"""
from pathlib import Path
from typing import Optional, Dict, Any


class QuarjarError(Exception):
    """Base exception for all quarjar errors"""

    def __init__(
        self,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        self.cause = cause
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error with all details"""
        lines = [
            "",
            "=" * 70,
            f"{self.__class__.__name__}",
            "=" * 70,
            "",
            self.message,
        ]

        if self.context:
            lines.append("")
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestion:
            lines.append("")
            lines.append("Suggestion:")
            lines.append(f"  {self.suggestion}")

        if self.cause:
            lines.append("")
            lines.append(f"Caused by: {type(self.cause).__name__}: {self.cause}")

        lines.append("")
        lines.append("=" * 70)
        lines.append("")

        return "\n".join(lines)


class ConfigurationError(QuarjarError):
    """Configuration is missing or invalid"""
    pass


class ValidationError(QuarjarError):
    """Input failed validation before any work was done"""
    pass


class ConflictError(QuarjarError):
    """Target output already exists and overwriting was not allowed"""
    pass


class RenderError(QuarjarError):
    """Quarto could not render the document"""
    pass


class ArchiveError(QuarjarError):
    """The zip step reported a non-zero exit status"""

    def __init__(self, message: str, status: int, archive_path: Path, **kwargs):
        self.status = status
        self.archive_path = Path(archive_path)
        super().__init__(message, **kwargs)


class SkilljarAPIError(QuarjarError):
    """Error communicating with the Skilljar API"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        operation: Optional[str] = None,
        body: Optional[str] = None,
        **kwargs
    ):
        self.status_code = status_code
        self.operation = operation
        self.body = body
        super().__init__(message, **kwargs)


# Specific error factory functions

def missing_api_key_error() -> ConfigurationError:
    """Create error for a missing Skilljar API key"""
    return ConfigurationError(
        message="api_key is required",
        suggestion=(
            "Set the SKILLJAR_API_KEY environment variable:\n"
            "  export SKILLJAR_API_KEY=your-key-here\n\n"
            "Or add it to quarjar.yaml:\n"
            "  api_key: your-key-here"
        ),
        context={
            "checked_locations": [
                "SKILLJAR_API_KEY environment variable",
                "quarjar.yaml",
                "~/.quarjar/config.yaml",
            ]
        }
    )


def invalid_extension_error(path: Path, expected: str) -> ValidationError:
    """Create error for a source document with the wrong extension"""
    return ValidationError(
        message=f"Input file must have a {expected} extension.",
        suggestion=f"Pass the Quarto source document ({expected}), not its rendered output.",
        context={"file": str(path)}
    )


def source_not_found_error(path: Path) -> ValidationError:
    """Create error for a source document that does not exist"""
    return ValidationError(
        message=f"File not found: {path}",
        suggestion="Check the path is correct relative to the current directory.",
        context={"file": str(path), "cwd": str(Path.cwd())}
    )


def archive_exists_error(archive_path: Path) -> ConflictError:
    """Create error when a zip would be overwritten"""
    return ConflictError(
        message=f"Zip file already exists: {archive_path}",
        suggestion="Use overwrite=True (or --overwrite) to overwrite.",
        context={"archive": str(archive_path)}
    )


def archive_failed_error(status: int, archive_path: Path, staging_dir: Path) -> ArchiveError:
    """Create error when the zip step exits non-zero"""
    return ArchiveError(
        message=(
            f"Failed to create zip file: {archive_path} "
            f"(zip exited with status {status})"
        ),
        status=status,
        archive_path=archive_path,
        suggestion=(
            f"The rendered output was kept for inspection in:\n"
            f"  {staging_dir}"
        ),
        context={
            "exit_status": status,
            "archive": str(archive_path),
            "staging_dir": str(staging_dir),
        }
    )


def workflow_exists_error(target_path: Path) -> ConflictError:
    """Create error when the workflow file is already installed"""
    return ConflictError(
        message=f"Workflow file already exists: {target_path}",
        suggestion="Set overwrite=True (or pass --overwrite) to replace it.",
        context={"workflow": str(target_path)}
    )
