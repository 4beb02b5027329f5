from .core import run_case, run_batch, select_cases
from .io import write_csv, write_manifest
from .metrics import summarize, pretty_metrics

__all__ = ["run_case", "run_batch", "select_cases", "write_csv", "write_manifest",
           "summarize", "pretty_metrics"]
