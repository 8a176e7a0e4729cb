from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict

NO_EXTENSION = "[no extension]"

@dataclass
class ScanResult:
    total_files: int = 0
    total_directories: int = 0   # root itself is not counted
    total_size: int = 0
    largest_file_size: int = 0
    largest_file_path: str = ""
    file_types: Dict[str, int] = field(default_factory=dict)  # ext -> count
    root: str = ""
    elapsed_sec: float = 0.0
