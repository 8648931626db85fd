"""
Dependency Injection Container for Splyt.

Manages all service instances and their dependencies.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from splyt.application.use_cases.authenticate_wallet import AuthenticateWallet
from splyt.application.use_cases.cancel_split import CancelSplit
from splyt.application.use_cases.create_split import CreateSplit
from splyt.application.use_cases.get_split_by_id import GetSplitById
from splyt.application.use_cases.get_split_transactions import (
    GetSplitTransactions,
)
from splyt.application.use_cases.get_splits import GetSplits
from splyt.application.use_cases.get_splits_by_creator import GetSplitsByCreator
from splyt.application.use_cases.get_splits_by_participant import (
    GetSplitsByParticipant,
)
from splyt.application.use_cases.get_unread_notification_count import (
    GetUnreadNotificationCount,
)
from splyt.application.use_cases.list_notifications import ListNotifications
from splyt.application.use_cases.mark_all_notifications_read import (
    MarkAllNotificationsRead,
)
from splyt.application.use_cases.mark_notification_read import (
    MarkNotificationRead,
)
from splyt.application.use_cases.record_participant_payment import (
    RecordParticipantPayment,
)
from splyt.application.use_cases.send_payment_reminder import (
    SendPaymentReminder,
)
from splyt.config.settings import Settings, get_settings
from splyt.domain.repositories.i_notification_repository import (
    INotificationRepository,
)
from splyt.domain.repositories.i_split_repository import ISplitRepository
from splyt.domain.repositories.i_transaction_log_repository import (
    ITransactionLogRepository,
)
from splyt.domain.repositories.i_user_repository import IUserRepository
from splyt.domain.services.i_split_registry import ISplitRegistry
from splyt.domain.services.i_wallet_authenticator import IWalletAuthenticator
from splyt.infrastructure.auth.ethereum_wallet_adapter import (
    EthereumWalletAdapter,
)
from splyt.infrastructure.blockchain.placeholder_split_registry import (
    PlaceholderSplitRegistry,
)
from splyt.infrastructure.blockchain.split_factory_client import (
    SplitFactoryClient,
)
from splyt.infrastructure.monitoring.logger import get_logger
from splyt.infrastructure.persistence.database import Database
from splyt.infrastructure.persistence.repositories.notification_repository import (  # noqa: E501
    NotificationRepository,
)
from splyt.infrastructure.persistence.repositories.split_repository import (
    SplitRepository,
)
from splyt.infrastructure.persistence.repositories.transaction_log_repository import (  # noqa: E501
    TransactionLogRepository,
)
from splyt.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

logger = get_logger(__name__)


class DIContainer:
    """
    Dependency Injection Container.

    Process-wide services (database, wallet authenticator, split
    registry) are created lazily and cached. Repositories and use cases
    are built per request around the request's session.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize container with None instances.

        Args:
            settings: Optional Settings instance (for testing)
        """
        self._settings = settings

        # Infrastructure
        self._database: Optional[Database] = None

        # Domain Services
        self._wallet_authenticator: Optional[IWalletAuthenticator] = None
        self._split_registry: Optional[ISplitRegistry] = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    async def initialize(self) -> None:
        """Initialize all services and establish connections."""
        await self.database.connect()

        if self.database.is_sqlite:
            # No migrations for SQLite; build the schema directly
            await self.database.create_tables()

        logger.info(
            f"Split registry: {type(self.split_registry).__name__} "
            f"(BLOCKCHAIN_ENABLED={self.settings.BLOCKCHAIN_ENABLED})"
        )

    async def shutdown(self) -> None:
        """Cleanup resources and close connections."""
        if self._database:
            await self._database.disconnect()

    # ================================================================
    # Infrastructure
    # ================================================================

    @property
    def database(self) -> Database:
        """Get database instance."""
        if self._database is None:
            self._database = Database(
                database_url=self.settings.DATABASE_URL,
                echo=self.settings.DATABASE_ECHO,
            )
        return self._database

    # ================================================================
    # Domain Services
    # ================================================================

    @property
    def wallet_authenticator(self) -> IWalletAuthenticator:
        """Get wallet authenticator instance."""
        if self._wallet_authenticator is None:
            self._wallet_authenticator = EthereumWalletAdapter()
        return self._wallet_authenticator

    @property
    def split_registry(self) -> ISplitRegistry:
        """
        Get split registry instance.

        SplitFactoryClient when BLOCKCHAIN_ENABLED is set, otherwise the
        placeholder that synthesizes identifiers.
        """
        if self._split_registry is None:
            settings = self.settings
            if settings.BLOCKCHAIN_ENABLED:
                self._split_registry = SplitFactoryClient(
                    rpc_url=settings.BLOCKCHAIN_RPC_URL,
                    contract_address=settings.SPLIT_FACTORY_CONTRACT_ADDRESS,
                    gas_payer_key=settings.GAS_PAYER_KEY,
                    confirmations_required=(
                        settings.BLOCKCHAIN_CONFIRMATIONS_REQUIRED
                    ),
                    receipt_timeout=settings.BLOCKCHAIN_RECEIPT_TIMEOUT,
                    expiry_days=settings.BLOCKCHAIN_SPLIT_EXPIRY_DAYS,
                    gas_payer_address=settings.GAS_PAYER_ADDRESS,
                )
            else:
                self._split_registry = PlaceholderSplitRegistry()
        return self._split_registry

    # ================================================================
    # Repositories (session-scoped)
    # ================================================================

    def get_user_repository(self, session: AsyncSession) -> IUserRepository:
        return UserRepository(session)

    def get_split_repository(self, session: AsyncSession) -> ISplitRepository:
        return SplitRepository(
            session,
            strict_amount_check=self.settings.SPLIT_STRICT_AMOUNT_CHECK,
        )

    def get_transaction_log_repository(
        self, session: AsyncSession
    ) -> ITransactionLogRepository:
        return TransactionLogRepository(session)

    def get_notification_repository(
        self, session: AsyncSession
    ) -> INotificationRepository:
        return NotificationRepository(session)

    # ================================================================
    # Use Cases (session-scoped)
    # ================================================================

    def get_authenticate_wallet(self, session: AsyncSession) -> AuthenticateWallet:
        """
        Get authenticate wallet use case with session-scoped repository.

        Args:
            session: Active database session

        Returns:
            AuthenticateWallet use case instance
        """
        return AuthenticateWallet(
            user_repository=self.get_user_repository(session),
            wallet_authenticator=self.wallet_authenticator,
        )

    def get_create_split(self, session: AsyncSession) -> CreateSplit:
        return CreateSplit(
            split_repository=self.get_split_repository(session),
            user_repository=self.get_user_repository(session),
            split_registry=self.split_registry,
        )

    def get_get_split_by_id(self, session: AsyncSession) -> GetSplitById:
        return GetSplitById(split_repository=self.get_split_repository(session))

    def get_get_splits(self, session: AsyncSession) -> GetSplits:
        return GetSplits(
            split_repository=self.get_split_repository(session),
            user_repository=self.get_user_repository(session),
        )

    def get_get_splits_by_creator(
        self, session: AsyncSession
    ) -> GetSplitsByCreator:
        return GetSplitsByCreator(
            split_repository=self.get_split_repository(session),
            user_repository=self.get_user_repository(session),
        )

    def get_get_splits_by_participant(
        self, session: AsyncSession
    ) -> GetSplitsByParticipant:
        return GetSplitsByParticipant(
            split_repository=self.get_split_repository(session),
            user_repository=self.get_user_repository(session),
        )

    def get_record_participant_payment(
        self, session: AsyncSession
    ) -> RecordParticipantPayment:
        return RecordParticipantPayment(
            split_repository=self.get_split_repository(session),
            transaction_log_repository=self.get_transaction_log_repository(
                session
            ),
            notification_repository=self.get_notification_repository(session),
            user_repository=self.get_user_repository(session),
        )

    def get_send_payment_reminder(
        self, session: AsyncSession
    ) -> SendPaymentReminder:
        return SendPaymentReminder(
            split_repository=self.get_split_repository(session),
            notification_repository=self.get_notification_repository(session),
        )

    def get_cancel_split(self, session: AsyncSession) -> CancelSplit:
        return CancelSplit(
            split_repository=self.get_split_repository(session),
            notification_repository=self.get_notification_repository(session),
        )

    def get_get_split_transactions(
        self, session: AsyncSession
    ) -> GetSplitTransactions:
        return GetSplitTransactions(
            split_repository=self.get_split_repository(session),
            transaction_log_repository=self.get_transaction_log_repository(
                session
            ),
        )

    def get_list_notifications(self, session: AsyncSession) -> ListNotifications:
        return ListNotifications(
            notification_repository=self.get_notification_repository(session)
        )

    def get_get_unread_notification_count(
        self, session: AsyncSession
    ) -> GetUnreadNotificationCount:
        return GetUnreadNotificationCount(
            notification_repository=self.get_notification_repository(session)
        )

    def get_mark_notification_read(
        self, session: AsyncSession
    ) -> MarkNotificationRead:
        return MarkNotificationRead(
            notification_repository=self.get_notification_repository(session)
        )

    def get_mark_all_notifications_read(
        self, session: AsyncSession
    ) -> MarkAllNotificationsRead:
        return MarkAllNotificationsRead(
            notification_repository=self.get_notification_repository(session)
        )


# Global container instance
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """Get global DI container instance."""
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


def set_container(container: Optional[DIContainer]) -> None:
    """Replace the global container (tests)."""
    global _container
    _container = container


async def initialize_container() -> DIContainer:
    """Initialize and return DI container."""
    container = get_container()
    await container.initialize()
    return container


async def shutdown_container() -> None:
    """Shutdown DI container."""
    container = get_container()
    await container.shutdown()
