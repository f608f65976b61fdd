"""Convenience wrapper around the OpenFGA client used by application code."""

from openfga_sdk.client.models import ClientCheckRequest, ClientListObjectsRequest
from openfga_sdk.sync import OpenFgaClient


def _fga_id(type_name: str, identifier: str) -> str:
    return f"{type_name}:{identifier}"


class Fga:
    """Type/id style access checks on top of an OpenFgaClient.

    ``fga.check("document", "roadmap", "viewer", "user", "anne")`` asks
    whether ``user:anne`` is a ``viewer`` of ``document:roadmap``.
    """

    def __init__(self, client: OpenFgaClient):
        self._client = client

    @property
    def client(self) -> OpenFgaClient:
        return self._client

    def check(
        self,
        object_type: str,
        object_id: str,
        relation: str,
        user_type: str,
        user_id: str,
    ) -> bool:
        response = self._client.check(
            ClientCheckRequest(
                user=_fga_id(user_type, user_id),
                relation=relation,
                object=_fga_id(object_type, object_id),
            )
        )
        return bool(response.allowed)

    def list_objects(
        self,
        user_type: str,
        user_id: str,
        relation: str,
        object_type: str,
    ) -> list[str]:
        """Return the ids of every ``object_type`` the user has ``relation`` on."""
        response = self._client.list_objects(
            ClientListObjectsRequest(
                user=_fga_id(user_type, user_id),
                relation=relation,
                type=object_type,
            )
        )
        prefix = f"{object_type}:"
        return [
            obj[len(prefix):] if obj.startswith(prefix) else obj
            for obj in (response.objects or [])
        ]
