"""Search and filtering over the downloadable file list."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .models import DownloadFile

ALL = "all"


def _matches_search(file: DownloadFile, term: str) -> bool:
    if term in file.name.lower():
        return True
    return bool(file.description) and term in file.description.lower()


def filter_files(
    files: Iterable[DownloadFile],
    search_term: str = "",
    category_id: str = ALL,
    type_id: str = ALL,
) -> List[DownloadFile]:
    """Files matching every active criterion, in their original order."""

    term = search_term.lower()
    result: List[DownloadFile] = []
    for f in files:
        if term and not _matches_search(f, term):
            continue
        if category_id != ALL and f.category != category_id:
            continue
        if type_id != ALL and f.type != type_id:
            continue
        result.append(f)
    return result


def find_file(files: Iterable[DownloadFile], file_id: str) -> Optional[DownloadFile]:
    for f in files:
        if f.id == file_id:
            return f
    return None
