"""Per-call context handed to tool operations."""

from typing import Protocol

from vectorize_mcp.vectorize.client import VectorizeAPI


class AccountResolver(Protocol):
    """Supplies the active account of the invoking agent session."""

    async def get_active_account_id(self) -> str | None:
        """Return the active account ID, or None when no account is selected."""
        ...


class StaticAccountResolver:
    """Resolver returning a fixed account ID (or none)."""

    def __init__(self, account_id: str | None) -> None:
        self._account_id = account_id

    async def get_active_account_id(self) -> str | None:
        return self._account_id


class ToolContext:
    """Collaborators available to a tool invocation.

    The account is resolved on every call and never cached here.
    """

    def __init__(
        self,
        account_resolver: AccountResolver,
        client: VectorizeAPI,
    ) -> None:
        self.account_resolver = account_resolver
        self.client = client

    async def resolve_account_id(self) -> str | None:
        """Resolve the active account for this call."""
        return await self.account_resolver.get_active_account_id()
