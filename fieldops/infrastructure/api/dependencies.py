"""FastAPI dependency injection: wires adapters into use cases."""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.adapters.clock.system_clock import SystemClock
from fieldops.adapters.memory.repositories import InMemoryLoginAttemptRepository
from fieldops.adapters.notifications.logging_dispatcher import LoggingNotificationDispatcher
from fieldops.adapters.notifications.webhook_dispatcher import WebhookNotificationDispatcher
from fieldops.adapters.persistence.database import get_session
from fieldops.adapters.persistence.repositories import (
    SqlTechnicianRepository,
    SqlUserRepository,
    SqlWorkOrderRepository,
)
from fieldops.adapters.persistence.transaction import SqlTransaction
from fieldops.adapters.security.password import BcryptPasswordHasher
from fieldops.adapters.security.tokens import InvalidToken, decode_access_token
from fieldops.application.ports.clock_port import ClockPort
from fieldops.application.ports.login_attempt_repo import LoginAttemptRepository
from fieldops.application.ports.notification_port import NotificationPort
from fieldops.application.ports.technician_repo import TechnicianRepository
from fieldops.application.ports.transaction_port import TransactionPort
from fieldops.application.ports.user_repo import UserRepository
from fieldops.application.ports.work_order_repo import WorkOrderRepository
from fieldops.application.use_cases.assign_work_order import AssignWorkOrderUseCase
from fieldops.application.use_cases.authenticate import AccountLocks, AuthenticateUseCase
from fieldops.application.use_cases.progress_work_order import ProgressWorkOrderUseCase
from fieldops.application.use_cases.register_user import RegisterUserUseCase
from fieldops.config import settings
from fieldops.domain.entities.user_account import AuthenticatedIdentity

logger = logging.getLogger(__name__)


# Process-wide singletons: the locks must be shared by every request
_registry_lock = asyncio.Lock()
_account_locks = AccountLocks()
_attempt_repo = InMemoryLoginAttemptRepository()
_clock = SystemClock()
_hasher = BcryptPasswordHasher()

if settings.notification_webhook_url:
    _notifier: NotificationPort = WebhookNotificationDispatcher(clock=_clock)
    logger.info("Using webhook notifications: %s", settings.notification_webhook_url)
else:
    _notifier = LoggingNotificationDispatcher()

_bearer = HTTPBearer(auto_error=False)


def get_clock() -> ClockPort:
    return _clock


def get_notifier() -> NotificationPort:
    return _notifier


def get_attempt_repo() -> LoginAttemptRepository:
    return _attempt_repo


def get_technician_repo(session: AsyncSession = Depends(get_session)) -> TechnicianRepository:
    return SqlTechnicianRepository(session)


def get_work_order_repo(session: AsyncSession = Depends(get_session)) -> WorkOrderRepository:
    return SqlWorkOrderRepository(session)


def get_transaction(session: AsyncSession = Depends(get_session)) -> TransactionPort:
    return SqlTransaction(session)


def get_user_repo(session: AsyncSession = Depends(get_session)) -> UserRepository:
    return SqlUserRepository(session)


def get_assign_uc(
    technicians: TechnicianRepository = Depends(get_technician_repo),
    orders: WorkOrderRepository = Depends(get_work_order_repo),
    notifier: NotificationPort = Depends(get_notifier),
    clock: ClockPort = Depends(get_clock),
    transaction: TransactionPort = Depends(get_transaction),
) -> AssignWorkOrderUseCase:
    return AssignWorkOrderUseCase(
        technician_repo=technicians,
        work_order_repo=orders,
        notifier=notifier,
        clock=clock,
        registry_lock=_registry_lock,
        saturation_threshold=settings.saturation_threshold,
        automatic_actor_id=settings.automatic_actor_id,
        notification_channels=settings.notification_channels,
        transaction=transaction,
    )


def get_progress_uc(
    technicians: TechnicianRepository = Depends(get_technician_repo),
    orders: WorkOrderRepository = Depends(get_work_order_repo),
    transaction: TransactionPort = Depends(get_transaction),
) -> ProgressWorkOrderUseCase:
    return ProgressWorkOrderUseCase(
        technician_repo=technicians,
        work_order_repo=orders,
        registry_lock=_registry_lock,
        saturation_threshold=settings.saturation_threshold,
        transaction=transaction,
    )


def get_authenticate_uc(
    users: UserRepository = Depends(get_user_repo),
    attempts: LoginAttemptRepository = Depends(get_attempt_repo),
    clock: ClockPort = Depends(get_clock),
) -> AuthenticateUseCase:
    return AuthenticateUseCase(
        user_repo=users,
        attempt_repo=attempts,
        hasher=_hasher,
        clock=clock,
        account_locks=_account_locks,
        max_attempts=settings.max_failed_attempts,
        lockout=timedelta(minutes=settings.lockout_minutes),
    )


def get_register_uc(users: UserRepository = Depends(get_user_repo)) -> RegisterUserUseCase:
    return RegisterUserUseCase(user_repo=users, hasher=_hasher)


def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> AuthenticatedIdentity:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    try:
        return decode_access_token(credentials.credentials, settings.jwt_secret)
    except InvalidToken:
        raise HTTPException(status_code=401, detail="Invalid or expired token")


def require_supervisor(
    identity: AuthenticatedIdentity = Depends(get_current_identity),
) -> AuthenticatedIdentity:
    """Role gate for the assignment tools."""
    if not identity.is_supervisor():
        raise HTTPException(
            status_code=403, detail="Only technical supervisors can access this module"
        )
    return identity
