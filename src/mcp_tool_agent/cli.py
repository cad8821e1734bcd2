"""Interactive command line chat with an MCP tool-calling agent."""

import asyncio
from typing import Callable

from openai import AsyncOpenAI

from mcp_tool_agent.agent_core import Agent, AgentError, SystemMessage, ToolProviderRegistry, print_outputs
from mcp_tool_agent.agent_core.logger import get_logger, setup_logging
from mcp_tool_agent.chat_impl import OpenAIChatService
from mcp_tool_agent.config import AgentSettings
from mcp_tool_agent.mcp_wrapper import connect_stdio_provider

logger = get_logger(__name__)

QUIT_COMMAND = "quit"
DEBUG_COMMAND = "debug"


def build_agent(settings: AgentSettings) -> Agent:
    """Wire the OpenAI chat service, the stdio provider registry and the agent."""
    client = AsyncOpenAI(api_key=settings.api_key, base_url=settings.base_url)
    chat_service = OpenAIChatService(client=client, model_name=settings.model)
    return Agent(
        chat_service,
        ToolProviderRegistry(connect_stdio_provider),
        provider_specs=settings.providers,
        max_hops=settings.max_hops,
    )


async def run_prompt_loop(
    agent: Agent,
    system_prompt: str,
    read_input: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    """
    Runs the prompt loop until the user types ``quit``.

    Args:
        agent: A connected agent.
        system_prompt: Sent as the first turn so the assistant greets the user.
        read_input: Blocking line reader, run in a worker thread.
        write: Output sink for every output item.
    """
    await _run_turn(agent, SystemMessage(content=system_prompt), write)

    while True:
        # Newlines before and after the user input, for clarity
        write("")
        prompt = (await asyncio.to_thread(read_input, ">>> ")).strip()
        write("")

        if prompt == QUIT_COMMAND:
            break
        if not prompt:
            continue
        if prompt == DEBUG_COMMAND:
            write(f"Tools: {agent.registry.tool_names}")
            for message in agent.history:
                write(f"Message: {message.model_dump(exclude_none=True)}")
            continue

        await _run_turn(agent, prompt, write)


async def _run_turn(agent: Agent, message: str | SystemMessage, write: Callable[[str], None]) -> None:
    try:
        await print_outputs(agent.turn(message), write)
    except AgentError as e:
        logger.error("Turn failed: %s", e)
        write(f"An error occurred: {e}")


async def main() -> int:
    """Entry point of the command line agent. Returns the process exit code."""
    try:
        settings = AgentSettings.from_env()
    except AgentError as e:
        print(f"Error: {e}")
        return 1

    setup_logging(settings.log_level)
    agent = build_agent(settings)

    try:
        async with agent:
            for name in agent.registry.tool_names:
                logger.info("Tool available: %s", name)
            await run_prompt_loop(agent, settings.system_prompt)
    except AgentError as e:
        print(f"Error: {e}")
        return 1
    except (EOFError, KeyboardInterrupt):
        pass

    print("Goodbye!")
    return 0


def run() -> None:
    raise SystemExit(asyncio.run(main()))
