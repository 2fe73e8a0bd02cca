"""Receipt file storage on the local filesystem."""

import logging
import secrets
from pathlib import Path

from refund_api.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_RECEIPT_TYPES = {"image/jpeg", "image/jpg", "image/png"}


class UploadStorage:
    """Stores uploaded receipts in a single directory under generated names."""

    def __init__(self, directory: str | Path, max_size_bytes: int):
        self.directory = Path(directory)
        self.max_size_bytes = max_size_bytes

    def ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def save(self, original_name: str | None, content_type: str | None, data: bytes) -> str:
        """Validate and store a receipt, returning the stored file name."""
        if content_type not in ALLOWED_RECEIPT_TYPES:
            raise ValidationError(
                f"Invalid file type. Allowed types: {', '.join(sorted(ALLOWED_RECEIPT_TYPES))}"
            )

        if len(data) > self.max_size_bytes:
            max_mb = self.max_size_bytes // (1024 * 1024)
            raise ValidationError(f"File too large. Maximum size is {max_mb}MB.")

        if not data:
            raise ValidationError("File is empty")

        # Keep only the final path component of whatever the client sent
        safe_name = Path(original_name or "receipt").name.replace(" ", "_")
        filename = f"{secrets.token_hex(10)}-{safe_name}"

        self.ensure_directory()
        (self.directory / filename).write_bytes(data)
        logger.info(f"Stored receipt {filename} ({len(data)} bytes)")
        return filename

    def path_for(self, filename: str) -> Path:
        """Resolve a stored file name to its path, refusing anything outside the directory."""
        if not filename or Path(filename).name != filename:
            raise NotFoundError("File not found")

        path = self.directory / filename
        if not path.is_file():
            raise NotFoundError("File not found")
        return path

    def delete(self, filename: str) -> None:
        """Remove a stored file. Unknown names are ignored."""
        if not filename or Path(filename).name != filename:
            return

        path = self.directory / filename
        if path.is_file():
            path.unlink()
            logger.info(f"Deleted receipt {filename}")
