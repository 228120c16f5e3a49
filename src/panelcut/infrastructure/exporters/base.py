"""Export formats for cut layouts.

Every layout format (JSON, SVG, DXF) is a text document, so an exporter only
has to render text. Choosing formats and naming and writing the files is
shared here.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Iterable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from panelcut.application.dtos import OptimizationOutput


logger = logging.getLogger(__name__)


@runtime_checkable
class Exporter(Protocol):
    """Renders an optimization result as one text document.

    Attributes:
        format_name: Name used on the command line and in file names.
        file_extension: File extension without leading dot.
    """

    format_name: ClassVar[str]
    file_extension: ClassVar[str]

    def render(self, output: OptimizationOutput) -> str: ...


class UnknownFormatError(ValueError):
    """Raised when a format selection names formats nobody registered."""

    def __init__(self, unknown: list[str], available: list[str]) -> None:
        self.unknown = unknown
        self.available = available
        super().__init__(
            f"Unknown formats: {', '.join(unknown)}. "
            f"Available formats: {', '.join(available) or 'none'}"
        )


class ExporterRegistry:
    """Export formats by name.

    Exporter modules register their class with ``@ExporterRegistry.register``
    when imported; importing ``panelcut.infrastructure.exporters`` loads all
    of them.
    """

    _exporters: ClassVar[dict[str, type[Exporter]]] = {}

    @classmethod
    def register(cls, format_name: str):
        """Class decorator registering an exporter under ``format_name``."""

        def decorator(exporter_class: type[Exporter]) -> type[Exporter]:
            existing = cls._exporters.get(format_name)
            if existing is not None and existing is not exporter_class:
                raise ValueError(
                    f"Format '{format_name}' is already handled by {existing.__name__}"
                )
            cls._exporters[format_name] = exporter_class
            logger.debug(f"Registered exporter '{format_name}': {exporter_class.__name__}")
            return exporter_class

        return decorator

    @classmethod
    def get(cls, format_name: str) -> type[Exporter]:
        """Exporter class for a format.

        Raises:
            KeyError: If no exporter is registered for the format.
        """
        try:
            return cls._exporters[format_name]
        except KeyError:
            raise KeyError(
                f"No exporter registered for format '{format_name}'. "
                f"Available formats: {', '.join(cls.available_formats()) or 'none'}"
            ) from None

    @classmethod
    def available_formats(cls) -> list[str]:
        return sorted(cls._exporters)

    @classmethod
    def resolve(cls, selection: str) -> list[str]:
        """Turn a ``--output-formats`` value into format names.

        ``selection`` is ``"all"`` or a comma-separated list. Names are
        case-insensitive, blanks are skipped and repeats collapse to the first
        mention.

        Raises:
            UnknownFormatError: If any name is not registered.
        """
        available = cls.available_formats()
        if selection.strip().lower() == "all":
            return available

        names = [part.strip().lower() for part in selection.split(",")]
        formats = list(dict.fromkeys(name for name in names if name))
        unknown = [name for name in formats if name not in cls._exporters]
        if unknown:
            raise UnknownFormatError(unknown, available)
        return formats


def project_slug(name: str) -> str:
    """File-name friendly version of a project name."""
    slug = re.sub(r"[^A-Za-z0-9_-]+", "_", name).strip("_").lower()
    return slug or "project"


class ExportManager:
    """Writes one project's layout files into a directory.

    Files are named ``{slug}_{format}.{ext}``, so every format of a project
    lands side by side and re-running overwrites the previous export.

    Attributes:
        output_dir: Directory receiving the files; created on first export.
        slug: File name prefix for the project.
    """

    def __init__(self, output_dir: Path, slug: str = "project") -> None:
        self.output_dir = Path(output_dir)
        self.slug = slug

    def path_for(self, format_name: str) -> Path:
        extension = ExporterRegistry.get(format_name).file_extension
        return self.output_dir / f"{self.slug}_{format_name}.{extension}"

    def export(self, formats: Iterable[str], output: OptimizationOutput) -> dict[str, Path]:
        """Render and write each format.

        Returns:
            Written file paths keyed by format name, in the order given.

        Raises:
            KeyError: If a format is not registered. Nothing is written then.
            OSError: If the directory or a file cannot be written.
        """
        targets = {name: self.path_for(name) for name in formats}
        self.output_dir.mkdir(parents=True, exist_ok=True)

        for format_name, path in targets.items():
            content = ExporterRegistry.get(format_name)().render(output)
            path.write_text(content, encoding="utf-8")
            logger.info(f"Wrote {format_name} layout for '{self.slug}' to {path}")

        return targets
