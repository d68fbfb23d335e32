"""Domain models package."""

from .output import DOCUMENT_VERSION, OutputDocument, TransformedProblem
from .remote import DownloadFilesResponse, DownloadInfo, FileKind, ProblemMeta, RemoteProblem

__all__ = [
    "DOCUMENT_VERSION",
    "DownloadFilesResponse",
    "DownloadInfo",
    "FileKind",
    "OutputDocument",
    "ProblemMeta",
    "RemoteProblem",
    "TransformedProblem",
]
