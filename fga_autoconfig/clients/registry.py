"""Process-wide OpenFGA binding, created lazily from environment settings."""

from fga_autoconfig.clients.factory import FgaBinding, bind
from fga_autoconfig.config.settings import get_settings

_binding: FgaBinding | None = None


def get_fga_binding() -> FgaBinding | None:
    """Get the binding singleton. Returns None if no api_url is configured."""
    global _binding
    if _binding is not None:
        return _binding

    _binding = bind(get_settings())
    return _binding


def close_fga_binding() -> None:
    """Close the client's connection pool and forget the binding."""
    global _binding
    if _binding is not None:
        _binding.client.close()
    _binding = None
