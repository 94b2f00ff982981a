"""
Improve-privacy action queue.

Runs the actions a user selected from the recommendation list, one
after another, through a registry of handlers.  Handlers may be
plain callables or coroutines.  A missing handler yields a
``skipped`` result; an exception or timeout yields ``failed`` and
the queue carries on with the next action.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Iterable, Mapping

from privacy_assistant import config
from privacy_assistant.models import actions, recommendations, report
from privacy_assistant.utils import logger
from privacy_assistant.utils.errors import get_error_message

log = logger.create_logger("ActionQueue")

ActionHandler = Callable[
    [actions.ActionExecutionContext],
    actions.ActionHandlerResult | Awaitable[actions.ActionHandlerResult],
]
ActionHandlerRegistry = Mapping[str, ActionHandler]

NO_HANDLER_MESSAGE = "No action handler is registered for this recommendation."
UNEXPECTED_FAILURE_MESSAGE = "Action failed unexpectedly."


def dedupe_action_ids(
    selected_action_ids: Iterable[recommendations.RecommendationActionId],
) -> list[recommendations.RecommendationActionId]:
    """Drop repeated ids, keeping the first occurrence order."""
    return list(dict.fromkeys(selected_action_ids))


async def _invoke(
    handler: ActionHandler,
    context: actions.ActionExecutionContext,
    timeout: float,
) -> actions.ActionHandlerResult:
    """Run one handler under *timeout* and validate what it returns.

    Coroutine handlers run on the loop; plain callables run in a
    worker thread so a blocking handler still times out.  A timed-out
    thread is abandoned, not interrupted.
    """

    async def call() -> actions.ActionHandlerResult:
        if inspect.iscoroutinefunction(handler):
            outcome = await handler(context)
        else:
            outcome = await asyncio.to_thread(handler, context)
        if inspect.isawaitable(outcome):
            outcome = await outcome
        return actions.ActionHandlerResult.model_validate(outcome)

    return await asyncio.wait_for(call(), timeout=timeout)


async def execute_action_queue(
    selected_action_ids: Iterable[recommendations.RecommendationActionId],
    registry: ActionHandlerRegistry,
    context: actions.ActionExecutionContext,
    *,
    timeout: float | None = None,
) -> list[actions.ActionResult]:
    """Execute the selected actions sequentially.

    Args:
        selected_action_ids: Action ids chosen by the user; repeats
            are ignored.
        registry: Handler per action id.
        context: The tab the actions apply to.
        timeout: Per-handler limit in seconds.  Defaults to
            ``ACTION_TIMEOUT_SECONDS``.

    Returns:
        One :class:`ActionResult` per distinct action id, in
        selection order.
    """
    limit = timeout if timeout is not None else config.get_settings().action_timeout_seconds
    results: list[actions.ActionResult] = []

    for action_id in dedupe_action_ids(selected_action_ids):
        handler = registry.get(action_id)
        if handler is None:
            results.append(actions.ActionResult(action_id=action_id, status="skipped", message=NO_HANDLER_MESSAGE))
            continue

        try:
            outcome = await _invoke(handler, context, limit)
        except TimeoutError:
            log.warn("Action timed out", {"action": action_id, "timeout": limit})
            results.append(
                actions.ActionResult(
                    action_id=action_id,
                    status="failed",
                    message=f"Action timed out after {limit:g}s.",
                )
            )
            continue
        except Exception as error:
            message = str(error) or UNEXPECTED_FAILURE_MESSAGE
            log.error("Action failed", {"action": action_id, "error": get_error_message(error)})
            results.append(actions.ActionResult(action_id=action_id, status="failed", message=message))
            continue

        results.append(actions.ActionResult(action_id=action_id, status=outcome.status, message=outcome.message))

    log.info(
        "Action queue finished",
        {
            "actions": len(results),
            "succeeded": sum(1 for r in results if r.status == "success"),
            "failed": sum(1 for r in results if r.status == "failed"),
        },
    )
    return results


async def execute_actions_and_refresh(
    request_id: str,
    selected_action_ids: Iterable[recommendations.RecommendationActionId],
    registry: ActionHandlerRegistry,
    context: actions.ActionExecutionContext,
    refresh_analysis: Callable[[], Awaitable[report.PrivacyAnalysisReport]],
) -> actions.ActionRefreshResult:
    """Run the queue, then re-run the analysis so the score reflects it."""
    results = await execute_action_queue(selected_action_ids, registry, context)
    refreshed = await refresh_analysis()
    return actions.ActionRefreshResult(request_id=request_id, results=results, refreshed_analysis=refreshed)


# ============================================================================
# Default handlers
# ============================================================================


def _manual_guidance(title: str) -> ActionHandler:
    def handler(_context: actions.ActionExecutionContext) -> actions.ActionHandlerResult:
        return actions.ActionHandlerResult(
            status="skipped",
            message=f"{title} currently requires manual user action.",
        )

    return handler


def default_action_registry() -> dict[str, ActionHandler]:
    """Handlers that need no browser host.

    Cookie removal and settings navigation depend on the extension
    host and are registered by it, not here.
    """
    return {
        "limit_third_party_scripts": _manual_guidance("Limiting third-party scripts"),
        "block_known_trackers": _manual_guidance("Blocking known trackers"),
    }
