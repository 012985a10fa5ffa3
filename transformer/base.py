"""Common interface for exporting a cached schedule week."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Optional

from schedule_cache.models import ScheduleDocument


class BaseTransformer(ABC):
    """Turns one cached week into another format and writes it out.

    Subclasses set ``EXTENSION`` and implement ``transform`` and ``save``.
    """

    EXTENSION = ""

    @abstractmethod
    def transform(self, document: ScheduleDocument, today: date) -> Any:
        """Convert ``document`` into the export format.

        Args:
            document: The cached week to export.
            today: Reference date used to place the week's "M.d" dates in a year.
        """

    @abstractmethod
    def save(self, output_path: str) -> None:
        """Write the last transform() result to ``output_path``."""

    def output_path(self, path: str) -> str:
        """Append ``EXTENSION`` to ``path`` unless it already ends with it."""
        if self.EXTENSION and not path.lower().endswith(self.EXTENSION):
            return f"{path}{self.EXTENSION}"
        return path

    def export(self, document: ScheduleDocument, output_path: str, today: Optional[date] = None) -> tuple[Any, str]:
        """Transform ``document`` and save it.

        Returns:
            The transformed data and the path actually written.
        """
        result = self.transform(document, today or date.today())
        path = self.output_path(output_path)
        self.save(path)
        return result, path
