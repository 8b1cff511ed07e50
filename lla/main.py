"""Entry point: loads config, wires the agents, runs the chat loop."""

import sys

from lla.agents.conversationalist import Conversationalist
from lla.agents.evaluator import Evaluator
from lla.agents.labeler import Labeler
from lla.agents.registry import AgentRegistry
from lla.agents.router import Router, create_orchestration_agent
from lla.assistant import Assistant
from lla.config import Settings, load_settings
from lla.conversation import ConversationSession
from lla.errors import BackendError, ConfigurationFault
from lla.graph import Orchestrator
from lla.storage.archivist import Archivist
from lla.utils.prompts import load_prompt

QUIT_COMMANDS = {"quit", "exit"}


def build_assistant(settings: Settings, archivist: Archivist | None = None) -> Assistant:
    """Wire registry, router, evaluator and orchestrator from settings.

    Raises ConfigurationFault if no agent ends up registered.
    """
    registry = AgentRegistry()
    registry.register(
        Conversationalist(
            settings.conversationalist_model,
            settings.ollama_url,
            load_prompt("conversationalist", settings.username),
            timeout=settings.request_timeout,
        )
    )

    agents = registry.list()
    orchestration_agent = create_orchestration_agent(
        settings.orchestrator_model,
        settings.ollama_url,
        agents,
        timeout=settings.request_timeout,
    )
    orchestrator = Orchestrator(
        registry,
        Router(orchestration_agent, agents),
        Evaluator(orchestration_agent),
        max_iterations=settings.max_iterations,
    )
    labeler = Labeler(
        settings.labeler_model,
        settings.ollama_url,
        load_prompt("labeler", settings.username),
        timeout=settings.request_timeout,
    )
    session = ConversationSession(archivist or Archivist(settings.history_dir))
    return Assistant(labeler, registry, orchestrator, session)


def chat_loop(assistant: Assistant, read_line=input) -> None:
    """Read user lines until quit/exit or EOF, printing each final response."""
    while True:
        try:
            line = read_line("You: ")
        except EOFError:
            print()
            break

        text = line.strip()
        if not text:
            continue
        if text in QUIT_COMMANDS:
            break

        try:
            outcome = assistant.handle(text)
        except BackendError as exc:
            print(f"[LLA] Backend error: {exc}", file=sys.stderr)
            continue

        print(f"Assistant: {outcome.response.content}\n")

    assistant.session.save()
    print("Goodbye!")


def run(args: list[str]) -> int:
    try:
        settings = load_settings()
    except ConfigurationFault as exc:
        print(f"[LLA] {exc}", file=sys.stderr)
        return 1

    archivist = Archivist(settings.history_dir)

    if "--list" in args:
        for name in archivist.list():
            print(name)
        return 0

    try:
        assistant = build_assistant(settings, archivist)
    except ConfigurationFault as exc:
        print(f"[LLA] {exc}", file=sys.stderr)
        return 1

    if "--resume" in args:
        index = args.index("--resume")
        if index + 1 >= len(args):
            print("[LLA] --resume needs a conversation file name.", file=sys.stderr)
            return 2
        try:
            conversation = assistant.session.resume(args[index + 1])
        except (FileNotFoundError, ValueError) as exc:
            print(f"[LLA] Cannot resume: {exc}", file=sys.stderr)
            return 1
        print(f"[LLA] Resumed: {conversation.title} ({len(conversation.messages)} messages)")

    print("Local LLM Assistant")
    print(
        f"Orchestrator: {settings.orchestrator_model} | "
        f"Conversationalist: {settings.conversationalist_model}"
    )
    print("Type 'quit' to exit\n")

    chat_loop(assistant)
    return 0


def main() -> None:
    """CLI entry point."""
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
