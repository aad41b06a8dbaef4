"""Public URLs for images kept in a tenant's Supabase storage bucket."""

from urllib.parse import quote

from menuhub.domain.exceptions import ValidationException


class SupabaseImageStorage:
    """Builds ``{endpoint}/storage/v1/object/public/{bucket}/{path}`` URLs.

    No network call is made; the bucket is public-read.
    """

    def __init__(self, endpoint: str, bucket: str) -> None:
        if not endpoint:
            raise ValueError("endpoint is required")
        if not bucket:
            raise ValueError("bucket is required")
        self.endpoint = endpoint.rstrip("/")
        self.bucket = bucket

    def get_public_url(self, path: str) -> str:
        """Return the public URL of a stored object path.

        Raises:
            ValidationException: If path is empty or tries to leave the bucket.
        """
        clean = path.strip().lstrip("/")
        if not clean:
            raise ValidationException("Image path is empty", field="image_path")
        if any(part == ".." for part in clean.split("/")):
            raise ValidationException("Image path must stay inside the bucket", field="image_path")
        return (
            f"{self.endpoint}/storage/v1/object/public/"
            f"{quote(self.bucket, safe='')}/{quote(clean, safe='/')}"
        )
