#!/usr/bin/env python3
"""Interactive CLI for the Learnmap API: AI drafting and entry management."""

import asyncio
import sys

import httpx

API_BASE = "http://localhost:8000"

HELP_TEXT = """
Learnmap Interactive Chat
=========================

Commands:
  /entries             - List entries (newest first)
  /save <main>/<sub>/<title>
                       - Save the last AI answer as a new entry
  /delete <id>         - Delete an entry
  /help                - Show this help
  /quit                - Exit

Just type a prompt to get a Markdown draft from the AI!
"""


class LearnmapChat:
    def __init__(self):
        self.client = httpx.AsyncClient(base_url=API_BASE, timeout=120.0)
        self.last_answer: str | None = None

    async def close(self):
        await self.client.aclose()

    async def ask(self, prompt: str) -> str:
        """Send a prompt and get a Markdown draft."""
        try:
            response = await self.client.post(
                "/v1/ai/completions",
                json={"prompt": prompt},
            )
            response.raise_for_status()
            data = response.json()

            self.last_answer = data["content"]
            result = f"\n{data['content']}\n"
            if data.get("suggested_title"):
                result += f"\n[suggested title: {data['suggested_title']}]"
            return result

        except httpx.HTTPError as e:
            return f"Error: {e}"

    async def entries(self) -> str:
        """List entries."""
        try:
            response = await self.client.get("/v1/entries")
            response.raise_for_status()
            data = response.json()

            lines = [f"{len(data)} Entries:"]
            for e in data:
                topic = f"{e['main_topic']} / {e['sub_topic'] or '-'}"
                lines.append(f"  {e['id'][:12]:12} | {topic[:40]:40} | {e['title']}")

            return "\n".join(lines)

        except httpx.HTTPError as e:
            return f"Error: {e}"

    async def save(self, path: str) -> str:
        """Save the last answer as an entry under main/sub/title."""
        if not self.last_answer:
            return "No previous answer to save."

        parts = [p.strip() for p in path.split("/")]
        if len(parts) != 3:
            return "Usage: /save <main>/<sub>/<title>"
        main_topic, sub_topic, title = parts

        try:
            response = await self.client.post(
                "/v1/entries",
                json={
                    "main_topic": main_topic,
                    "sub_topic": sub_topic,
                    "title": title,
                    "description": self.last_answer,
                },
            )
            response.raise_for_status()
            data = response.json()
            return f"Saved entry {data['entry']['id']}"

        except httpx.HTTPError as e:
            return f"Error: {e}"

    async def delete(self, entry_id: str) -> str:
        """Delete an entry."""
        try:
            response = await self.client.delete(f"/v1/entries/{entry_id}")
            response.raise_for_status()
            return f"Deleted entry {entry_id}"

        except httpx.HTTPError as e:
            return f"Error: {e}"


async def main():
    print(HELP_TEXT)

    chat = LearnmapChat()

    # Check connection
    try:
        await chat.client.get("/health")
        print("Connected to Learnmap API at", API_BASE)
    except httpx.HTTPError:
        print(f"Error: Cannot connect to Learnmap API at {API_BASE}")
        print("Make sure the API is running: python -m learnmap.api.main")
        return

    print("-" * 50)

    try:
        while True:
            try:
                user_input = input("\nYou: ").strip()
            except EOFError:
                break

            if not user_input:
                continue

            if user_input.lower() in ["/quit", "/exit", "/q"]:
                print("Goodbye!")
                break

            elif user_input.lower() == "/help":
                print(HELP_TEXT)

            elif user_input.lower() == "/entries":
                result = await chat.entries()
                print(f"\n{result}")

            elif user_input.lower().startswith("/save "):
                result = await chat.save(user_input[len("/save "):])
                print(f"\n{result}")

            elif user_input.lower().startswith("/delete "):
                result = await chat.delete(user_input.split(maxsplit=1)[1])
                print(f"\n{result}")

            elif user_input.startswith("/"):
                print("Unknown command. Type /help for available commands.")

            else:
                print("\nAI: ", end="", flush=True)
                result = await chat.ask(user_input)
                print(result)

    finally:
        await chat.close()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nGoodbye!")
        sys.exit(0)
