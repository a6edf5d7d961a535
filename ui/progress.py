"""Progress tracking"""

import sys
from abc import ABC, abstractmethod
from typing import Optional, TextIO


STAGE_NAMES = {
    0: "Reception",
    1: "Formula Translation",
    2: "Graph Building",
    3: "Validation",
}


class ProgressTracker(ABC):
    """Receives stage events from the importer"""

    @abstractmethod
    def start_stage(self, stage_num: int, stage_name: str):
        """A stage is about to run"""

    @abstractmethod
    def complete_stage(self, stage_num: int):
        """A stage returned normally"""

    @abstractmethod
    def fail(self, stage_num: int, message: str):
        """A stage raised; *message* is the StageError text"""

    @abstractmethod
    def complete(self):
        """The calculator has been built"""


class ConsoleProgress(ProgressTracker):
    """One line per event on stderr, so stdout can carry the JSON document"""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stderr
        self.completed = set()
        self.current = None

    def _label(self, stage_num: int) -> str:
        return STAGE_NAMES.get(stage_num, f"Stage {stage_num}")

    def _emit(self, line: str):
        print(line, file=self.stream)

    def start_stage(self, stage_num: int, stage_name: str):
        self.current = stage_num
        self._emit(f"[◉] Stage {stage_num}: {stage_name}...")

    def complete_stage(self, stage_num: int):
        self.completed.add(stage_num)
        self.current = None
        self._emit(f"[✓] Stage {stage_num}: {self._label(stage_num)} complete")

    def fail(self, stage_num: int, message: str):
        self.current = None
        self._emit(f"[✗] Stage {stage_num}: {self._label(stage_num)} failed - {message}")

    def complete(self):
        stages = ", ".join(str(num) for num in sorted(self.completed))
        self._emit(f"[✓] Import complete (stages {stages})")
