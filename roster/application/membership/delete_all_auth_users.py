"""
Use case: Delete every auth user and, with them, their team memberships.

Input: None
Output: DeleteAllOutcome (terminal state, deleted auth users, error)
Side effects: Deletes auth users, then members referencing them. If the
member delete fails, the captured auth users are reinserted unchanged
(same ids, same password hashes).
Failure cases: PersistenceError (nothing deleted),
CompensatedDeletionError (consistent, "db-error"),
UncompensatedDeletionError (inconsistent, operators must intervene).

The two deletes are separate transactions, so the workflow is a small
linear state machine with a compensating reinsert instead of a single
multi-statement transaction:

    START -> PRIMARY_DELETED -> DEPENDENTS_DELETED -> DONE
      |             |
      |             +-> COMPENSATING -> FAILED_COMPENSATED
      |                             +-> FAILED_UNCOMPENSATED
      +-> FAILED_COUNT_ERROR
"""

import logging
import threading
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from enum import Enum

from roster.domain.membership.entities import AuthUser
from roster.domain.membership.errors import (
    CompensatedDeletionError,
    MembershipDomainError,
    UncompensatedDeletionError,
)
from roster.domain.membership.ports import AuthUserRepository, MemberRepository

logger = logging.getLogger(__name__)

# TODO: take a pg_advisory_xact_lock as well once the service runs with more
# than one worker process; this lock only serializes calls within a process.
_DELETE_ALL_LOCK = threading.Lock()


class DeleteAllState(Enum):
    """States of the delete-all-auth-users workflow."""

    START = "start"
    PRIMARY_DELETED = "primary_deleted"
    DEPENDENTS_DELETED = "dependents_deleted"
    COMPENSATING = "compensating"
    DONE = "done"
    FAILED_COUNT_ERROR = "failed_count_error"
    FAILED_COMPENSATED = "failed_compensated"
    FAILED_UNCOMPENSATED = "failed_uncompensated"


TERMINAL_STATES = frozenset(
    {
        DeleteAllState.DONE,
        DeleteAllState.FAILED_COUNT_ERROR,
        DeleteAllState.FAILED_COMPENSATED,
        DeleteAllState.FAILED_UNCOMPENSATED,
    }
)


@dataclass
class DeleteAllOutcome:
    """Result of one run of the workflow.

    Attributes:
        state: Terminal state reached.
        deleted: Auth users removed by the primary delete (empty if it failed).
        removed_members: Members removed by the dependent delete.
        error: The error to surface for failed terminal states.
        dependent_error: Why the member delete failed, when it did.
    """

    state: DeleteAllState = DeleteAllState.START
    deleted: list[AuthUser] = field(default_factory=list)
    removed_members: int = 0
    error: MembershipDomainError | None = None
    dependent_error: MembershipDomainError | None = None

    @property
    def succeeded(self) -> bool:
        return self.state is DeleteAllState.DONE


class DeleteAllAuthUsersUseCase:
    """Orchestrates the cascading delete of auth users and their members.

    Args:
        auth_user_repo: Store of the primary entities.
        member_repo: Store of the dependent entities.
        lock: Serializes concurrent runs. Defaults to a process-wide
            threading.Lock.
    """

    def __init__(
        self,
        auth_user_repo: AuthUserRepository,
        member_repo: MemberRepository,
        lock: AbstractContextManager | None = None,
    ) -> None:
        self._auth_user_repo = auth_user_repo
        self._member_repo = member_repo
        self._lock = lock if lock is not None else _DELETE_ALL_LOCK

    def run(self) -> DeleteAllOutcome:
        """Drive the state machine to a terminal state. Never raises domain errors."""
        with self._lock:
            outcome = DeleteAllOutcome()
            while outcome.state not in TERMINAL_STATES:
                self._step(outcome)
            return outcome

    def execute(self) -> int:
        """Run the workflow and raise for failed terminal states.

        Returns:
            Number of deleted auth users.

        Raises:
            PersistenceError: The primary delete failed; nothing was removed.
            CompensatedDeletionError: Members could not be deleted; auth users restored.
            UncompensatedDeletionError: Members could not be deleted and restoring failed.
        """
        outcome = self.run()
        if outcome.error is not None:
            raise outcome.error
        return len(outcome.deleted)

    def _step(self, outcome: DeleteAllOutcome) -> None:
        if outcome.state is DeleteAllState.START:
            self._delete_primary(outcome)
        elif outcome.state is DeleteAllState.PRIMARY_DELETED:
            self._delete_dependents(outcome)
        elif outcome.state is DeleteAllState.DEPENDENTS_DELETED:
            outcome.state = DeleteAllState.DONE
            logger.info(
                "Deleted all auth users (%d) and their members (%d)",
                len(outcome.deleted),
                outcome.removed_members,
            )
        elif outcome.state is DeleteAllState.COMPENSATING:
            self._compensate(outcome)
        else:
            raise RuntimeError(f"No transition from state {outcome.state}")

    def _delete_primary(self, outcome: DeleteAllOutcome) -> None:
        try:
            outcome.deleted = self._auth_user_repo.delete_all()
        except MembershipDomainError as error:
            logger.error("Deleting auth users failed, nothing removed: %s", error.message)
            outcome.error = error
            outcome.state = DeleteAllState.FAILED_COUNT_ERROR
            return
        outcome.state = DeleteAllState.PRIMARY_DELETED

    def _delete_dependents(self, outcome: DeleteAllOutcome) -> None:
        user_ids = [u.id for u in outcome.deleted]
        try:
            outcome.removed_members = self._member_repo.delete_by_user_ids(user_ids)
        except MembershipDomainError as error:
            logger.warning(
                "Deleting members failed, restoring %d auth users: %s",
                len(outcome.deleted),
                error.message,
            )
            outcome.dependent_error = error
            outcome.state = DeleteAllState.COMPENSATING
            return
        outcome.state = DeleteAllState.DEPENDENTS_DELETED

    def _compensate(self, outcome: DeleteAllOutcome) -> None:
        try:
            self._auth_user_repo.restore_bulk(outcome.deleted)
        except MembershipDomainError as error:
            logger.critical(
                "Restoring %d auth users failed; auth users are missing while "
                "their members remain: %s",
                len(outcome.deleted),
                error.message,
            )
            outcome.error = UncompensatedDeletionError(
                "auth user", lost=len(outcome.deleted), cause=error
            )
            outcome.state = DeleteAllState.FAILED_UNCOMPENSATED
            return
        outcome.error = CompensatedDeletionError("auth user", restored=len(outcome.deleted))
        outcome.error.__cause__ = outcome.dependent_error
        outcome.state = DeleteAllState.FAILED_COMPENSATED
