"""LangGraph StateGraph for one turn: route once, then respond/evaluate/refine.

    route -> respond -> evaluate -> END            (complete)
                ^          |
                |          v
                +------ refine                    (needs more work)

    respond -> timeout -> END                     (iteration cap reached)
"""

import sys
from dataclasses import dataclass

from langgraph.graph import END, StateGraph

from lla.agents.evaluator import Evaluator, NeedsMoreWork
from lla.agents.registry import AgentRegistry
from lla.agents.router import Router
from lla.conversation import ConversationSession
from lla.errors import ConfigurationFault
from lla.messages import Message, create_message
from lla.state import TurnState

FOLLOW_UP_TEMPLATE = "Please elaborate on your previous response. The issue: {reason}"


@dataclass(frozen=True)
class TurnOutcome:
    response: Message
    agent_name: str
    iterations: int
    status: str
    pending: tuple[Message, ...] = ()  # Commit these before the response.


def _context(state: TurnState) -> tuple[Message, ...]:
    """Committed conversation plus the turn's uncommitted messages."""
    return state["session"].messages + state["pending"]


def _route_after_response(state: TurnState, max_iterations: int) -> str:
    """Conditional edge after the agent responds: evaluate unless the cap is reached."""
    if state["iteration"] >= max_iterations:
        return "timeout"
    return "evaluate"


def _route_after_evaluation(state: TurnState) -> str:
    """Conditional edge after evaluation.

    Only NeedsMoreWork loops back; Complete and RouteToAgent both end the turn.
    Evaluation only runs below the cap, so a refinement is always allowed here.
    """
    if isinstance(state["decision"], NeedsMoreWork):
        return "refine"
    return "end"


def _set_timeout(state: TurnState) -> dict:
    """Set status to max_iterations_reached when the loop ceiling is hit."""
    print(f"[LLA] Warning: max iterations reached ({state['iteration']}).", file=sys.stderr)
    return {"status": "max_iterations_reached"}


class Orchestrator:
    """Bounded refinement loop over the registered agents.

    Registry, router and evaluator are read-only after construction. The
    conversation is supplied per turn through the session and never retained.
    """

    def __init__(
        self,
        registry: AgentRegistry,
        router: Router,
        evaluator: Evaluator,
        max_iterations: int = 5,
    ):
        if len(registry) == 0:
            raise ConfigurationFault("At least one agent must be registered.")
        if max_iterations < 0:
            raise ConfigurationFault("max_iterations must be non-negative.")
        self.registry = registry
        self.router = router
        self.evaluator = evaluator
        self.max_iterations = max_iterations
        self.graph = self._build_graph()

    # --- Nodes ---

    def _route(self, state: TurnState) -> dict:
        choice = self.router.route(_context(state))
        agent = self.registry.get(choice)
        if agent is None:
            agent = self.registry.default_agent()
            if agent is None:
                raise ConfigurationFault("No agent available to handle the request.")
            print(f"[LLA] Warning: router chose '{choice}', defaulting to {agent.name}.", file=sys.stderr)
        return {"agent_name": agent.name}

    def _respond(self, state: TurnState) -> dict:
        agent = self.registry.get(state["agent_name"])
        return {"response": agent.chat(_context(state))}

    def _evaluate(self, state: TurnState) -> dict:
        decision = self.evaluator.evaluate(state["user_input"], state["response"].content)
        update = {"decision": decision}
        if not isinstance(decision, NeedsMoreWork):
            update["status"] = "complete"
        return update

    def _refine(self, state: TurnState) -> dict:
        """Commit the pending user message and the superseded response, then ask to elaborate."""
        session = state["session"]
        reason = state["decision"].reason
        print(f"[LLA] Needs more work: {reason}")
        for message in state["pending"]:
            session.add_message(message)
        session.add_message(state["response"])
        session.add_message(create_message("user", FOLLOW_UP_TEMPLATE.format(reason=reason)))
        return {"pending": (), "iteration": state["iteration"] + 1}

    # --- Edges ---

    def _after_response(self, state: TurnState) -> str:
        return _route_after_response(state, self.max_iterations)

    def _build_graph(self):
        workflow = StateGraph(TurnState)

        workflow.add_node("route", self._route)
        workflow.add_node("respond", self._respond)
        workflow.add_node("evaluate", self._evaluate)
        workflow.add_node("refine", self._refine)
        workflow.add_node("timeout", _set_timeout)

        workflow.set_entry_point("route")

        workflow.add_edge("route", "respond")
        workflow.add_conditional_edges(
            "respond",
            self._after_response,
            {"evaluate": "evaluate", "timeout": "timeout"},
        )
        workflow.add_conditional_edges(
            "evaluate",
            _route_after_evaluation,
            {"end": END, "refine": "refine"},
        )
        workflow.add_edge("refine", "respond")
        workflow.add_edge("timeout", END)

        return workflow.compile()

    def run_turn(self, session: ConversationSession, user_message: Message) -> TurnOutcome:
        """Run the loop for one turn. Nothing from a failed turn is committed.

        ``user_message`` must not be in the session yet. Agents see it as the
        last message; it is committed together with the first refinement pair.
        The outcome's ``pending`` messages and its response are left for the
        caller to commit. Raises BackendError from any backend call; refinement
        pairs committed before the failure stay.
        """
        state: TurnState = {
            "session": session,
            "user_input": user_message.content,
            "pending": (user_message,),
            "agent_name": "",
            "response": None,
            "decision": None,
            "iteration": 0,
            "status": "in_progress",
        }
        # route + respond + timeout, plus refine/respond/evaluate per iteration
        recursion_limit = 3 * self.max_iterations + 10
        final_state = self.graph.invoke(state, {"recursion_limit": recursion_limit})

        return TurnOutcome(
            response=final_state["response"],
            agent_name=final_state["agent_name"],
            iterations=final_state["iteration"],
            status=final_state["status"],
            pending=final_state["pending"],
        )
