"""Orchestrator package - coordinates preview and upload passes."""
from .core import UploadOrchestrator
from .models import PreviewReport, UploadReport

__all__ = ["UploadOrchestrator", "PreviewReport", "UploadReport"]
