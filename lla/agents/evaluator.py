"""Evaluator: asks the orchestration agent whether a response completes the request.

Replies are classified by prefix:
  "complete..."              -> Complete
  "incomplete: <reason>"     -> NeedsMoreWork(reason)
  "incomplete" (no colon)    -> NeedsMoreWork("needs more work")
  anything else              -> Complete (fail open so a turn always terminates)
"""

from dataclasses import dataclass
from typing import Union

from lla.agents.agent import Agent
from lla.messages import create_message
from lla.utils.parsing import normalize_reply

EVALUATION_TEMPLATE = "Original request: {request}\n\nResponse: {response}\n\nIs this complete?"
INCOMPLETE_MARKER = "incomplete:"
DEFAULT_REASON = "needs more work"


@dataclass(frozen=True)
class Complete:
    pass


@dataclass(frozen=True)
class NeedsMoreWork:
    reason: str


@dataclass(frozen=True)
class RouteToAgent:
    """Never produced by evaluate(); the refinement loop treats it as Complete."""

    name: str


OrchestratorDecision = Union[Complete, NeedsMoreWork, RouteToAgent]


def parse_decision(reply: str) -> OrchestratorDecision:
    """Classify a raw evaluator reply."""
    content = normalize_reply(reply)

    if content.startswith("complete"):
        return Complete()

    if content.startswith("incomplete"):
        reason = ""
        if content.startswith(INCOMPLETE_MARKER):
            reason = content[len(INCOMPLETE_MARKER):].strip()
        return NeedsMoreWork(reason or DEFAULT_REASON)

    return Complete()


class Evaluator:
    def __init__(self, agent: Agent):
        self.agent = agent

    def evaluate(self, original_request: str, response: str) -> OrchestratorDecision:
        """Judge a single request/response pair. Conversation history is not sent.

        Raises BackendError if the orchestration call fails.
        """
        messages = [
            self.agent.system_message(),
            create_message(
                "user",
                EVALUATION_TEMPLATE.format(request=original_request, response=response),
            ),
        ]
        print("[LLA] Validating response...")
        result = self.agent.chat(messages)
        decision = parse_decision(result.content)

        if isinstance(decision, NeedsMoreWork):
            print(f"[LLA] {decision.reason}")
        else:
            print("[LLA] Responding to user.")
        return decision
