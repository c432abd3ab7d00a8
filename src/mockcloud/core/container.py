# src/mockcloud/core/container.py
"""Mock container: three databases, one fault configuration, account state.

Every handle obtained from a container (the container, any of its databases,
their engine) resolves to the same FaultConfiguration object, so a fault set
through one is seen by all of them.

Example:
    container = MockContainer(rng=random.Random(7))
    db = container.private_database
    db.add_records([Record.named("r1", "Note", title="hello")])
    container.faults.fail_records(RecordID("r1"))
    db.add(FetchRecordsOperation([RecordID("r1")], fetch_records_result=on_done))
"""

from __future__ import annotations

import random as random_module
from collections.abc import Callable
from typing import ClassVar

from mockcloud.contracts.enums import AccountStatus, DatabaseScope, FaultCode
from mockcloud.contracts.errors import ServiceError
from mockcloud.contracts.records import Record, RecordID
from mockcloud.core.config import DEFAULT_CONTAINER_IDENTIFIER, MockCloudSettings
from mockcloud.core.database import MockDatabase
from mockcloud.core.logging import get_logger
from mockcloud.engine.executor import ExecutionEngine
from mockcloud.faults.registry import FaultConfiguration, shared_faults
from mockcloud.faults.taxonomy import make_account_status_error, make_error

logger = get_logger(__name__)


class MockContainer:
    """Entry point owning the public, private and shared databases.

    Args:
        identifier: Container identifier; falls back to the settings' value
        faults: Fault configuration to share (default: shared_faults(), or a
            fresh one built from ``settings`` when settings carry faults)
        settings: Settings to build from (seed, result cap, initial faults)
        rng: Random source for the engine; overrides the settings' seed
    """

    _default: ClassVar[MockContainer | None] = None

    def __init__(
        self,
        identifier: str | None = None,
        *,
        faults: FaultConfiguration | None = None,
        settings: MockCloudSettings | None = None,
        rng: random_module.Random | None = None,
    ) -> None:
        self.settings = settings if settings is not None else MockCloudSettings()
        self.identifier = identifier if identifier is not None else self.settings.container_identifier

        if faults is None:
            faults = FaultConfiguration.from_settings(self.settings) if settings is not None else shared_faults()
        elif settings is not None:
            faults.apply_settings(settings)
        self.faults = faults

        if rng is None:
            rng = random_module.Random(self.settings.seed)
        self.engine = ExecutionEngine(self.faults, rng=rng, max_results_limit=self.settings.max_results_limit)

        self._databases: dict[DatabaseScope, MockDatabase] = {
            scope: MockDatabase(scope, self.engine) for scope in DatabaseScope
        }
        self._account_status: AccountStatus | None = None
        self.user_record: Record | None = None

    @classmethod
    def default(cls) -> MockContainer:
        """Process-wide container wired to shared_faults()."""
        if cls._default is None:
            cls._default = cls(DEFAULT_CONTAINER_IDENTIFIER)
        return cls._default

    # Databases

    @property
    def public_database(self) -> MockDatabase:
        return self._databases[DatabaseScope.PUBLIC]

    @property
    def private_database(self) -> MockDatabase:
        return self._databases[DatabaseScope.PRIVATE]

    @property
    def shared_database(self) -> MockDatabase:
        return self._databases[DatabaseScope.SHARED]

    def database(self, scope: DatabaseScope) -> MockDatabase:
        return self._databases[DatabaseScope(scope)]

    # Account simulation

    @property
    def account_status_value(self) -> AccountStatus | None:
        return self._account_status

    @account_status_value.setter
    def account_status_value(self, status: AccountStatus | None) -> None:
        self._account_status = None if status is None else AccountStatus(status)

    def set_account_status_error(self, status: AccountStatus) -> None:
        """Set a failing account status.

        Raises:
            ValueError: If ``status`` is AVAILABLE, which is not a failure
        """
        status = AccountStatus(status)
        if status is AccountStatus.AVAILABLE:
            raise ValueError("Account status error must be a status other than AVAILABLE")
        self._account_status = status

    def account_status(self, handler: Callable[[AccountStatus, ServiceError | None], None]) -> None:
        """Report the account status; anything but AVAILABLE comes with an error."""
        status = self._account_status if self._account_status is not None else AccountStatus.COULD_NOT_DETERMINE
        if status is AccountStatus.AVAILABLE:
            handler(status, None)
        else:
            handler(status, make_account_status_error(status))

    def fetch_user_record_id(self, handler: Callable[[RecordID | None, ServiceError | None], None]) -> None:
        """Report the user record's ID when signed in.

        No user record means NOT_AUTHENTICATED; a record with a non-available
        account status yields the account-status error.
        """
        if self.user_record is None:
            handler(None, make_error(FaultCode.NOT_AUTHENTICATED))
            return
        if self._account_status is AccountStatus.AVAILABLE:
            handler(self.user_record.record_id, None)
            return
        status = self._account_status if self._account_status is not None else AccountStatus.COULD_NOT_DETERMINE
        handler(None, make_account_status_error(status))

    # Reset

    def reset(self) -> None:
        """Clear account state, faults and every database's records."""
        self._account_status = None
        self.user_record = None
        self.faults.reset()
        for database in self._databases.values():
            database.reset_store()
        logger.debug("container_reset", identifier=self.identifier)

    def __repr__(self) -> str:
        return f"MockContainer(identifier={self.identifier!r})"
