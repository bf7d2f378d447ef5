"""Console entrypoint: drive the search widget from stdin lines."""

from __future__ import annotations

import asyncio
import sys

import httpx

from typeahead.config import get_settings
from typeahead.logging import configure_logging, logger
from typeahead.services.itunes import ITunesSearchProvider
from typeahead.ui.controller import TypeaheadWidget
from typeahead.ui.views import HistoryList, ResultsList

HELP = "Type to search. Commands: :pick N, :rm TITLE, :reuse TITLE, :focus, :blur, :quit"


def render_results(view: ResultsList) -> None:
    if not view.visible:
        return
    print("results:")
    for position, item in enumerate(view.items, start=1):
        print(f"  {position}. {item}")


def render_history(view: HistoryList) -> None:
    if not view.visible:
        return
    print("history:")
    for line in view.lines():
        print(f"  - {line}")


def handle_line(widget: TypeaheadWidget, line: str) -> bool:
    """Apply one console line to the widget; return False to stop."""

    line = line.rstrip("\n")
    if not line.startswith(":"):
        widget.input.change(line)
        return True

    command, _, argument = line[1:].partition(" ")
    if command == "quit":
        return False
    if command == "pick":
        try:
            index = int(argument) - 1
        except ValueError:
            logger.warning("console_bad_argument", command=command, argument=argument)
            return True
        widget.results.select_index(index)
    elif command == "rm":
        widget.history_view.request_remove(argument)
    elif command == "reuse":
        widget.history_view.request_reuse(argument)
    elif command == "focus":
        widget.input.focus()
    elif command == "blur":
        widget.input.blur()
    else:
        logger.warning("console_unknown_command", command=command, help=HELP)
    return True


async def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)

    async with httpx.AsyncClient() as client:
        provider = ITunesSearchProvider(client, settings.provider)
        widget = TypeaheadWidget(provider, settings=settings)
        widget.results.on_render(render_results)
        widget.history_view.on_render(render_history)
        widget.input.focus()

        logger.info("typeahead_starting", environment=settings.environment, help=HELP)
        try:
            while True:
                line = await asyncio.to_thread(sys.stdin.readline)
                if not line or not handle_line(widget, line):
                    break
        finally:
            widget.close()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
