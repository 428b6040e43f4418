"""Identity provider for a single local owner."""

from debt_ledger.application.ports.identity import IdentityPort, Owner
from debt_ledger.domain.constants import DEFAULT_USER_NAME


class StaticIdentity(IdentityPort):
    """Identity fixed at construction time (CLIs, tests)."""

    def __init__(
        self,
        owner_id: str | None,
        display_name: str = DEFAULT_USER_NAME,
    ) -> None:
        self._owner = (
            Owner(id=owner_id, display_name=display_name) if owner_id else None
        )

    def current_owner(self) -> Owner | None:
        return self._owner


__all__ = ["StaticIdentity"]
