from mcp_tool_agent.cli import run

if __name__ == "__main__":
    run()
