"""Interactive REPL for smalljs, powered by prompt_toolkit."""

from __future__ import annotations

import re
import sys
import traceback
from typing import Optional, TextIO

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.shortcuts import clear

from .parser import ParseError, lex_source
from .repl_highlight import SmallJSLexer
from .runner import repl_eval
from .runtime import UNDEFINED, JSObject, JSRuntimeError, create_global_env, init_stdlib
from .utils import debug_trace_enabled, set_debug_trace, stringify

# Zero-width and invisible characters to strip from input.
_INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\ufeff\u00a0\r]")

# Slash commands: name => (description, argument_hint).
_SLASH_CMDS = {
    "/clear": ("Clear the terminal screen", ""),
    "/trace": ("Toggle print tracing and Python tracebacks", "[on|off]"),
    "/reset": ("Reset the REPL environment", ""),
}

_OPENERS = {"(", "{"}
_CLOSERS = {")", "}"}


def open_depth(text: str) -> int:
    """Return how many (, { are still unclosed in *text*; -1 if unbalanced the other way."""
    try:
        tokens = list(lex_source(text))
    except ParseError:
        # an unterminated string or stray character; let the parser report it
        return 0

    depth = 0

    for tok in tokens:
        value = str(tok)
        if value in _OPENERS:
            depth += 1
        elif value in _CLOSERS:
            depth -= 1
            if depth < 0:
                return -1

    return depth


class _SlashCompleter(Completer):
    """Autocomplete slash commands on the primary prompt."""

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        if not text.startswith("/"):
            return

        for cmd, (desc, hint) in _SLASH_CMDS.items():
            if cmd.startswith(text):
                yield Completion(
                    cmd,
                    start_position=-len(text),
                    display_meta=desc,
                )


def _handle_slash(line: str, env_box: list[JSObject], out: Optional[TextIO]=None) -> bool:
    """Handle slash commands. Returns True if the line was a command."""
    stripped = line.strip()
    if not stripped.startswith("/"):
        return False

    parts = stripped.split(None, 1)
    cmd = parts[0]
    arg = parts[1] if len(parts) > 1 else ""

    if cmd == "/clear":
        clear()
        return True

    if cmd == "/trace":
        if arg.lower() in ("on", "1", "true", "yes"):
            set_debug_trace(True)
        elif arg.lower() in ("off", "0", "false", "no"):
            set_debug_trace(False)
        elif arg == "":
            set_debug_trace(not debug_trace_enabled())
        else:
            print("Usage: /trace [on|off]", file=sys.stderr)
            return True

        state = "on" if debug_trace_enabled() else "off"
        print(f"Trace: {state}")
        return True

    if cmd == "/reset":
        env_box[0] = create_global_env(out)
        print("Environment reset.")
        return True

    print(f"Unknown command: {cmd}", file=sys.stderr)
    return True


def _normalize(text: str) -> str:
    """Strip invisible characters from input."""
    return _INVISIBLE_RE.sub("", text)


def _compute_indent(text: str) -> str:
    """Indent continuation lines by four spaces per open brace."""
    depth = max(open_depth(text), 0)
    return " " * (4 * depth)


def eval_entry(text: str, env_box: list[JSObject], out: Optional[TextIO]=None) -> None:
    """Evaluate one submitted entry and echo its value like the prompt does."""
    text = _normalize(text)
    if not text.strip():
        return

    if _handle_slash(text, env_box, out):
        return

    try:
        result, stmt = repl_eval(text, env_box[0])
    except (ParseError, JSRuntimeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        if debug_trace_enabled():
            print("\nPython traceback:", file=sys.stderr)
            print(
                "".join(traceback.format_tb(exc.__traceback__)),
                file=sys.stderr,
                end="",
            )
        return

    if not stmt and result is not UNDEFINED:
        sink = out if out is not None else sys.stdout
        sink.write(stringify(result) + "\n")


def repl() -> None:
    """Interactive read-eval-print loop with prompt_toolkit."""
    init_stdlib()
    # Use a mutable box so /reset can swap the environment.
    env_box: list[JSObject] = [create_global_env()]

    history = InMemoryHistory()
    lexer = SmallJSLexer()

    bindings = KeyBindings()

    @bindings.add("backspace")
    def _backspace(event):
        buf = event.app.current_buffer
        buf.delete_before_cursor(1)
        if buf.text.startswith("/"):
            buf.start_completion()

    @bindings.add("enter")
    def _enter(event):
        buf = event.app.current_buffer
        text = buf.text

        # Submit once every brace and parenthesis is closed.
        if text.startswith("/") or open_depth(text) <= 0:
            buf.validate_and_handle()
            return

        buf.insert_text("\n" + _compute_indent(text))

    session: PromptSession[str] = PromptSession(
        history=history,
        lexer=lexer,
        completer=_SlashCompleter(),
        complete_while_typing=True,
        key_bindings=bindings,
        multiline=True,
        prompt_continuation="... ",
    )

    print("smalljs repl (Ctrl-D to exit, / for commands)")

    while True:
        try:
            text = session.prompt(">>> ")
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print("KeyboardInterrupt")
            continue

        eval_entry(text, env_box)


if __name__ == "__main__":
    repl()
