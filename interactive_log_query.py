import asyncio
import sys

from config import configure_logging, load_settings, require_api_key
from models import LogQueryError
from pipeline import QueryPipeline, create_pipeline

PROMPT = "log-query> "
EXIT_COMMANDS = ("exit", "quit")

BANNER = """Azure Log Analytics Natural Language Query Tool
Type "help" for available commands"""

HELP_TEXT = """
Azure Log Analytics Natural Language Query Tool
------------------------------------------------
Type your query in natural language, for example:
  - Show me all error traces from the last hour
  - What are the top 5 services with the most exceptions today?

Commands:
  help  - Show this help message
  exit  - Exit the application
  quit  - Exit the application

Options:
  You can add time range by including it in your query
  You can add a limit by specifying a number of results
"""


class LogQueryShell:
    def __init__(self, pipeline: QueryPipeline):
        self.pipeline = pipeline

    async def process_query(self, text: str):
        """Run one question through the pipeline, printing as each step finishes."""
        try:
            print("Processing query...")
            request = self.pipeline.build_request(text)

            kql = await self.pipeline.translate(request)
            print(f"\nGenerated KQL Query:\n{kql}\n")
            print("Executing query against Azure Log Analytics...")

            results = await self.pipeline.execute(kql, request.limit)
            print("\nResults:")
            print(results)
        except LogQueryError as e:
            print(f"Error: {e.message}", file=sys.stderr)

    async def handle_line(self, line: str) -> bool:
        """Handle one input line. Returns False once the session should end."""
        text = line.strip()
        if text in EXIT_COMMANDS:
            print("Goodbye!")
            return False
        if text == "help":
            print(HELP_TEXT)
        elif text:
            await self.process_query(text)
        return True

    async def run(self):
        print(BANNER)
        while True:
            try:
                line = input(PROMPT)
            except EOFError:
                return
            if not await self.handle_line(line):
                return


async def main():
    settings = load_settings()
    configure_logging(settings)
    require_api_key(settings)

    pipeline = create_pipeline(settings)
    try:
        await LogQueryShell(pipeline).run()
    finally:
        await pipeline.aclose()


def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nExiting log query tool")


if __name__ == "__main__":
    run()
