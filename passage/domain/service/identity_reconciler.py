"""Identity reconciliation domain service.

Maps an OAuth provider profile onto a local user account: either links the
provider to the signed-in user, finds the account that already owns the
provider identity, or creates a new account for it.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

import logfire

from passage.domain.error import AlreadyConnectedError, PreconditionError
from passage.domain.model import User
from passage.domain.repository import UserRepository
from passage.domain.value import ProviderIdentityQuery, ProviderProfile, UserId

from .base import Service

ACCOUNT_SETTINGS_REDIRECT = "/account-settings"


@dataclass
class ReconcileResult:
    """Outcome of reconciling a provider profile.

    `redirect_hint` is None when the caller should use its default redirect.
    """

    user: User
    redirect_hint: str | None = None


class IdentityReconciler(Service):
    """Domain service reconciling provider identities with local users.

    The check-then-create path for anonymous callers is not transactional:
    two concurrent first sign-ins with the same identity can both create a
    user. The store's unique username constraint is the only guard.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        link_redirect: str = ACCOUNT_SETTINGS_REDIRECT,
    ) -> None:
        """Initialize identity reconciler.

        Args:
            user_repository: User repository
            link_redirect: Redirect hint returned after linking a provider
        """
        self.user_repository = user_repository
        self.link_redirect = link_redirect

    async def reconcile(
        self, session_user: User | None, profile: ProviderProfile
    ) -> ReconcileResult:
        """Reconcile a provider profile with the local user store.

        Args:
            session_user: Currently signed-in user, if any
            profile: Normalized provider profile

        Returns:
            The resolved user and an optional redirect hint

        Raises:
            AlreadyConnectedError: If the session user already uses the provider
            StoreError: If the store query or write fails
        """
        with logfire.span(
            "identity_reconciler.reconcile",
            provider=profile.provider,
            authenticated=session_user is not None,
        ):
            if session_user is None:
                user = await self._find_or_create(profile)
                return ReconcileResult(user=user)

            user = await self._link(session_user, profile)
            return ReconcileResult(user=user, redirect_hint=self.link_redirect)

    async def _find_or_create(self, profile: ProviderProfile) -> User:
        query = ProviderIdentityQuery.for_profile(profile)
        existing = await self.user_repository.find_by_provider_identity(query)
        if existing:
            logfire.info(
                "Existing user matched provider identity",
                user_id=str(existing.id),
                provider=profile.provider,
            )
            return existing

        username = await self.user_repository.find_unique_username(
            profile.candidate_username()
        )
        now = datetime.now(timezone.utc)
        user = User(
            id=UserId(uuid4()),
            username=username,
            display_name=profile.display_name,
            email=profile.email,
            provider=profile.provider,
            provider_data=dict(profile.provider_data),
            created_at=now,
            updated_at=now,
        )
        saved = await self.user_repository.save(user)

        logfire.info(
            "New user created from provider profile",
            user_id=str(saved.id),
            username=saved.username,
            provider=profile.provider,
        )
        return saved

    async def _link(self, user: User, profile: ProviderProfile) -> User:
        if user.has_provider(profile.provider):
            logfire.warn(
                "Provider already connected",
                user_id=str(user.id),
                provider=profile.provider,
            )
            raise AlreadyConnectedError(user, profile.provider)

        saved = await self.user_repository.save(
            user.with_linked_provider(profile.provider, profile.provider_data)
        )

        logfire.info(
            "Provider linked", user_id=str(saved.id), provider=profile.provider
        )
        return saved

    async def unlink(self, user: User | None, provider: str | None) -> User:
        """Remove an additional provider from a user.

        The primary provider is never removed. Unlinking a provider that is
        not linked returns the user unchanged without writing to the store.

        Args:
            user: User to update
            provider: Provider name to unlink

        Returns:
            The (possibly updated) user

        Raises:
            PreconditionError: If user or provider is missing
            StoreError: If the store write fails
        """
        if user is None or not provider:
            raise PreconditionError("A user and a provider are required to unlink")

        with logfire.span(
            "identity_reconciler.unlink", user_id=str(user.id), provider=provider
        ):
            if provider not in user.additional_providers_data:
                logfire.info(
                    "Provider not linked, nothing to remove",
                    user_id=str(user.id),
                    provider=provider,
                )
                return user

            saved = await self.user_repository.save(
                user.without_linked_provider(provider)
            )

            logfire.info("Provider unlinked", user_id=str(saved.id), provider=provider)
            return saved
