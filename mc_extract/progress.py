"""
Terminal progress display
"""

import sys
from typing import Optional, TextIO

from mc_extract import constants


class ProgressLine:
    """
    Progress sink that keeps rewriting a single terminal line.

    Instances are callable as callback(index, total), so they can be passed
    straight to the extractors. Each update is flushed before returning.
    """

    def __init__(self, label: str = "", stream: Optional[TextIO] = None):
        self.label = label
        self.stream = stream or sys.stdout
        self.active = False

    def __call__(self, index: int, total: int) -> None:
        message = constants.PROGRESS_TEMPLATE.format(index=index, total=total)
        if self.label:
            message = f"{self.label}: {message}"
        self.stream.write(f"\r{message}")
        self.stream.flush()
        self.active = True

    def finish(self) -> None:
        """End the progress line so later output starts on a fresh line."""
        if self.active:
            self.stream.write("\n")
            self.stream.flush()
            self.active = False
