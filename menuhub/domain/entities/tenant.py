"""Tenant directory record.

Identity of one restaurant's isolated hosted project, as stored in the
central directory. Provisioned out of band; read-only on the serving path.
"""

from dataclasses import dataclass, field

from menuhub.domain.exceptions import ValidationException


@dataclass(frozen=True)
class TenantRecord:
    """Directory entry: display name plus the tenant's data endpoint and key.

    The access key is excluded from repr so it never lands in logs.
    """

    id: str
    display_name: str
    data_endpoint: str
    data_access_key: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationException("Tenant ID is required", field="id")
        if not self.data_endpoint:
            raise ValidationException(
                "Tenant data endpoint is required", field="data_endpoint"
            )
        if not self.data_access_key:
            raise ValidationException(
                "Tenant data access key is required", field="data_access_key"
            )

    def to_cache(self) -> dict[str, str]:
        """Serialize for the directory cache."""
        return {
            "id": self.id,
            "display_name": self.display_name,
            "data_endpoint": self.data_endpoint,
            "data_access_key": self.data_access_key,
        }

    @classmethod
    def from_cache(cls, data: dict) -> "TenantRecord":
        return cls(
            id=data["id"],
            display_name=data["display_name"],
            data_endpoint=data["data_endpoint"],
            data_access_key=data["data_access_key"],
        )
