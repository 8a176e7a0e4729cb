from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Mapping, Optional, Tuple
from .models import ScanResult

DEFAULT_TOP_EXTENSIONS = 10

UNITS = ["B", "KB", "MB", "GB", "TB"]

@dataclass
class Report:
    total_files: int
    total_directories: int
    total_size: str
    largest_file_size: Optional[str] = None
    largest_file_path: Optional[str] = None
    top_extensions: List[Tuple[str, int]] = field(default_factory=list)

def format_size(num: int) -> str:
    x = float(num)
    for u in UNITS:
        if x < 1024.0 or u == UNITS[-1]:
            return f"{x:.2f} {u}"
        x /= 1024.0
    return f"{x:.2f} TB"

def top_extensions(file_types: Mapping[str, int], limit: int = DEFAULT_TOP_EXTENSIONS) -> List[Tuple[str, int]]:
    # sorted() is stable, so equal counts keep the mapping's order
    items = sorted(file_types.items(), key=lambda kv: kv[1], reverse=True)
    return items[:max(0, limit)]

def build_report(result: ScanResult, limit: int = DEFAULT_TOP_EXTENSIONS) -> Report:
    report = Report(
        total_files=result.total_files,
        total_directories=result.total_directories,
        total_size=format_size(result.total_size),
        top_extensions=top_extensions(result.file_types, limit),
    )
    if result.total_files > 0:
        report.largest_file_size = format_size(result.largest_file_size)
        report.largest_file_path = result.largest_file_path
    return report

def report_to_dict(report: Report) -> Dict[str, Any]:
    data = asdict(report)
    data["top_extensions"] = [{"extension": ext, "count": c} for ext, c in report.top_extensions]
    return data
