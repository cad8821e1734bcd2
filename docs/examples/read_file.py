import asyncio
import os

from dotenv import load_dotenv
from openai import AsyncOpenAI

from mcp_tool_agent import Agent, OpenAIChatService, ProviderSpec, ToolProviderRegistry, connect_stdio_provider
from mcp_tool_agent.agent_core import print_outputs

# Load environment variables
load_dotenv()

SERVERS = [
    ProviderSpec(
        name="filesystem",
        command="npx",
        args=["-y", "@modelcontextprotocol/server-filesystem", "./"],
    )
]


async def main() -> None:
    """
    Asks the model to read a local file through the filesystem MCP server.
    """
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        print("Error: OPENAI_API_KEY not found in environment variables.")
        return

    client = AsyncOpenAI(api_key=api_key, base_url=os.getenv("OPENAI_BASE_URL"))
    chat_service = OpenAIChatService(client=client, model_name="mistral-small-latest")

    async with Agent(chat_service, ToolProviderRegistry(connect_stdio_provider), provider_specs=SERVERS) as agent:
        await print_outputs(agent.turn("Please read the file read_me.txt and tell me what you find inside."))


if __name__ == "__main__":
    asyncio.run(main())
