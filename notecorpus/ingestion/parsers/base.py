from abc import ABC, abstractmethod
from typing import List, Optional

from notecorpus.domain import Segment
from notecorpus.shared.exceptions import MalformedInputError
from notecorpus.shared.text_utils import TextPreprocessor


class BaseSegmentParser(ABC):
    def __init__(self, preprocessor: Optional[TextPreprocessor] = None):
        self.preprocessor = preprocessor or TextPreprocessor()

    @abstractmethod
    def parse_text(self, raw: str, source: str) -> List[Segment]:
        ...

    def read(self, path: str) -> str:
        """Read a file as strict UTF-8.

        Raises:
            MalformedInputError: If the file is missing, unreadable or not
                decodable as text
        """
        try:
            with open(path, "r", encoding="utf-8", newline=None) as handle:
                return handle.read()
        except UnicodeDecodeError as exc:
            raise MalformedInputError(path, f"not valid UTF-8 text ({exc.reason})") from exc
        except OSError as exc:
            raise MalformedInputError(path, exc.strerror or str(exc)) from exc

    def parse(self, path: str) -> List[Segment]:
        return self.parse_text(self.read(path), path)


__all__ = ["BaseSegmentParser"]
