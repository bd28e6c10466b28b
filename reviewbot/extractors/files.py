"""File changes extractor."""

from ..models import FileChange


def extract_file_change(pr_number: int, file_data: dict) -> FileChange:
    """Extract file change data from GitHub API response.

    Binary and very large files come back without a patch.
    """
    return FileChange(
        pr_number=pr_number,
        filename=file_data.get("filename", ""),
        status=file_data.get("status", "modified"),
        additions=file_data.get("additions", 0),
        deletions=file_data.get("deletions", 0),
        changes=file_data.get("changes", 0),
        patch=file_data.get("patch"),
        blob_url=file_data.get("blob_url"),
    )
