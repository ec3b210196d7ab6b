"""Command-line entry point: one-shot click or an interactive command loop."""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Sequence

from .automation.action_executor import ActionType
from .core.errors import SmartMouseError
from .core.logger import log
from .session import ActionOutcome, SmartMouse, build_session

ACTIONS = {
    "click": ActionType.CLICK,
    "right": ActionType.RIGHT_CLICK,
    "double": ActionType.DOUBLE_CLICK,
    "move": ActionType.MOVE,
}

HELP_TEXT = """
=== Smart Mouse Control ===
Commands:
  click <text>       - Click on element containing text
  right <text>       - Right-click on element
  double <text>      - Double-click on element
  move <text>        - Move mouse to element
  list               - List detected elements
  show               - Show detected elements
  refresh            - Refresh screen analysis
  quit               - Exit
"""


def describe_outcome(outcome: ActionOutcome) -> str:
    """User-facing line for an action outcome."""
    if not outcome.found:
        return f"Could not find element matching: {outcome.query}"
    x, y = outcome.point
    return f"{outcome.action.value}: {outcome.element.text!r} at ({x}, {y})"


class CommandLoop:
    """Line-oriented interactive control of a ``SmartMouse`` session."""

    def __init__(
        self,
        mouse: SmartMouse,
        read_line: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        self.mouse = mouse
        self._read_line = read_line
        self._write = write

    def handle(self, line: str) -> bool:
        """Execute one command line. Returns ``False`` when the loop should stop."""
        cmd, _, target = line.strip().partition(" ")
        target = target.strip()

        if not cmd:
            return True
        if cmd == "quit":
            return False

        if cmd == "refresh":
            elements = self.mouse.refresh()
            self._write(f"Detected {len(elements)} UI elements")
        elif cmd == "show":
            self.mouse.show_detections()
        elif cmd == "list":
            for i, el in enumerate(self.mouse.elements):
                self._write(
                    f"{i:3d}  {el.element_type.value:<6} {el.confidence:6.1f}  "
                    f"{el.bounds.as_tuple()}  {el.text!r}"
                )
        elif cmd in ACTIONS:
            if not target:
                self._write(f"Usage: {cmd} <text>")
            else:
                self._write(describe_outcome(self.mouse.act(target, ACTIONS[cmd])))
        else:
            self._write("Unknown command")
        return True

    def run(self) -> None:
        self._write(HELP_TEXT)
        while True:
            try:
                line = self._read_line("> ")
            except EOFError:
                break
            if not self.handle(line):
                break


def hue_value(value: str) -> int:
    """argparse type for an OpenCV hue."""
    hue = int(value)
    if not 0 <= hue <= 179:
        raise argparse.ArgumentTypeError(f"hue must be between 0 and 179, got {hue}")
    return hue


def tolerance_value(value: str) -> int:
    tolerance = int(value)
    if tolerance < 0:
        raise argparse.ArgumentTypeError(f"tolerance must not be negative, got {tolerance}")
    return tolerance


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smart-mouse",
        description="Find on-screen UI elements by their text and drive the mouse.",
    )
    parser.add_argument("target", nargs="?", help="Text of the element to act on (omit for interactive mode)")
    parser.add_argument("--action", choices=sorted(ACTIONS), default="click", help="Action to perform on the target")
    parser.add_argument("--show", action="store_true", help="Display detected elements and exit")
    parser.add_argument("--image", help="Analyze a screenshot file instead of the live screen")
    parser.add_argument("--dry-run", action="store_true", help="Resolve the target without moving the mouse")
    parser.add_argument("--hue", type=hue_value, help="Also detect regions of this OpenCV hue (0-179)")
    parser.add_argument("--hue-tolerance", type=tolerance_value, help="Hue tolerance for --hue")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        log.set_level("DEBUG")

    try:
        with build_session(
            image_path=args.image,
            dry_run=args.dry_run,
            color_hue=args.hue,
            color_tolerance=args.hue_tolerance,
        ) as mouse:
            if args.show:
                mouse.show_detections()
            elif args.target is not None:
                print(describe_outcome(mouse.act(args.target, ACTIONS[args.action])))
            else:
                CommandLoop(mouse).run()
    except SmartMouseError as exc:
        log.error(f"Fatal: {exc}")
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
