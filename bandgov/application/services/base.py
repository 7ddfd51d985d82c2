"""LoggingMixin: structured logging shared by the governance services.

Every service binds its class name and component once, then binds one
logger per governance operation (close_proposal, cast_vote,
vote_on_nomination, ...) with the ids it acts on. Events are
snake_case verbs in the past tense:

    class ProposalLifecycleService(LoggingMixin):
        def __init__(self, repository: ProposalRepositoryProtocol) -> None:
            self._repository = repository
            self._init_logger()

        async def withdraw_proposal(self, proposal_id: UUID, user_id: UUID) -> Proposal:
            log = self._log_operation("withdraw_proposal", proposal_id=str(proposal_id))
            ...
            log.info("proposal_withdrawn")
"""

import structlog

from bandgov.application.observability.correlation import get_correlation_id


class LoggingMixin:
    """Gives a service a bound structlog logger.

    Bound once per service: ``service`` (class name) and ``component``.
    Bound per operation: ``operation``, the request's ``correlation_id``
    when one is set, and the caller's ids.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "governance") -> None:
        """Bind the service logger; call from __init__."""
        self._log = structlog.get_logger().bind(
            service=self.__class__.__name__,
            component=component,
        )

    def _log_operation(
        self,
        operation: str,
        **context: object,
    ) -> structlog.BoundLogger:
        """Logger for one governance operation.

        Args:
            operation: Service method name, e.g. "close_proposal".
            **context: Ids to bind (proposal_id, user_id, band_id, ...).

        Returns:
            BoundLogger carrying the operation context.
        """
        correlation_id = get_correlation_id()
        if correlation_id:
            context["correlation_id"] = correlation_id
        return self._log.bind(operation=operation, **context)
