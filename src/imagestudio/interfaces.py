"""Protocol interfaces for imagestudio."""

from typing import Protocol

from typing_extensions import runtime_checkable


@runtime_checkable
class CredentialSelector(Protocol):
    """Host-provided hook for choosing an API key.

    Some hosting environments let the user pick a key through their own dialog.
    The gallery shell only asks whether one is selected and opens the dialog.
    """

    async def has_selected_api_key(self) -> bool:
        """Return True if the host already has a key selected."""
        ...

    async def open_select_key(self) -> None:
        """Open the host's key selection dialog."""
        ...
